"""Prompt builders for the generation endpoint. Pure string functions."""

import json

RECIPE_SCHEMA_EXAMPLE = (
    "{\n"
    '  "name": "Recipe Name",\n'
    '  "ingredients": [{"ingredient": "Ingredient name", "amount": "amount", "unit": "unit"}],\n'
    '  "instructions": ["Step 1", "Step 2", ...],\n'
    '  "nutrition": {"calories": number, "protein": number, "carbs": number, "fat": number, "fiber": number},\n'
    '  "prepTime": number,\n'
    '  "cookTime": number,\n'
    '  "servings": number,\n'
    '  "difficulty": "easy/medium/hard"\n'
    "}"
)

FULL_RECIPE_SCHEMA_EXAMPLE = RECIPE_SCHEMA_EXAMPLE.replace(
    '"name": "Recipe Name",\n',
    '"name": "Recipe Name",\n  "cuisine": "Cuisine",\n  "tags": ["tag"],\n',
)

SYSTEM_PROMPT = (
    "You are a professional chef and recipe writer. "
    "When asked for JSON, reply with JSON only and no extra commentary."
)


def recipe_options_prompt(search: str) -> str:
    return (
        f"List 5 popular {search} recipes. Return ONLY a JSON array in this format:\n"
        '[{"name": "Dish name", "description": "Brief description"}]'
    )


def ingredient_options_prompt(category: str) -> str:
    return (
        f"List 8 common {category} ingredients. Return ONLY a JSON array in this format:\n"
        f'[{{"name": "{category} name", "description": "Brief description"}}]'
    )


def ingredient_recommendations_prompt(category: str, base: str, current_ingredients: str) -> str:
    current = current_ingredients or "nothing else yet"
    return (
        f"Recommend 5 {category} options that go well with {base} and {current}. "
        "Return ONLY a JSON array in this format:\n"
        f'[{{"name": "{category} name", "description": "Why it\'s a good match"}}]'
    )


def recipe_prompt(name: str) -> str:
    return (
        f"Create a detailed recipe for {name}.\n"
        "Provide the recipe in this JSON format:\n"
        f"{FULL_RECIPE_SCHEMA_EXAMPLE}"
    )


def customization_prompt(name: str, customizations: list[str]) -> str:
    changes = "\n".join(f"- {c}" for c in customizations)
    return (
        f"Take the recipe {name} and apply these customizations:\n"
        f"{changes}\n"
        "Provide the customized recipe in this JSON format:\n"
        f"{FULL_RECIPE_SCHEMA_EXAMPLE}"
    )


def custom_recipe_prompt(
    base: str,
    protein: str,
    vegetables: list[str],
    seasonings: list[str],
    cooking_method: str,
    nutritional_targets: dict | None = None,
    allergies: list[str] | None = None,
) -> str:
    lines = [
        "Create a detailed recipe using:",
        f"- Base: {base}",
        f"- Protein: {protein}",
        f"- Vegetables: {', '.join(vegetables)}",
        f"- Seasonings: {', '.join(seasonings)}",
        f"- Cooking Method: {cooking_method}",
    ]
    if nutritional_targets:
        lines.append(f"- Nutritional targets: {json.dumps(nutritional_targets)}")
    if allergies:
        lines.append(f"- Avoid these ingredients: {', '.join(allergies)}")
    lines += ["", "Provide the recipe in this JSON format:", RECIPE_SCHEMA_EXAMPLE]
    return "\n".join(lines)
