"""
Defaulting pass for generated recipes.

`build_recipe_fields()` turns whatever the generator produced (partial,
mistyped, or not even an object) into a fully populated dict of Recipe
field values. No I/O here; callers decide whether to persist.
"""

import math
import re
from copy import deepcopy

from recipes.models import NUTRITION_KEYS, Recipe

DEFAULT_TYPE = "complete"
DEFAULT_CUISINE = "any"
DEFAULT_INGREDIENT = {"ingredient": "Unknown ingredient", "amount": "1", "unit": ""}
DEFAULT_INSTRUCTIONS = ["No instructions provided"]
DEFAULT_PREP_TIME = 15
DEFAULT_COOK_TIME = 30
DEFAULT_SERVINGS = 4
DEFAULT_DIFFICULTY = Recipe.Difficulty.MEDIUM.value

FALLBACK_RECIPE = {
    "type": "complete",
    "cuisine": "any",
    "tags": [],
    "ingredients": [
        {"ingredient": "Main ingredient", "amount": "500", "unit": "g"},
        {"ingredient": "Secondary ingredient", "amount": "200", "unit": "g"},
        {"ingredient": "Seasoning", "amount": "2", "unit": "tsp"},
    ],
    "instructions": [
        "Prepare all ingredients.",
        "Cook main ingredients until done.",
        "Add seasonings and serve.",
    ],
    "nutrition": {"calories": 350, "protein": 25, "carbs": 30, "fat": 15, "fiber": 5},
    "prep_time": 15,
    "cook_time": 30,
    "servings": 4,
    "difficulty": "medium",
}

_NUMBER = re.compile(r"[-+]?\d*\.?\d+")


def _number_from(val):
    """
    Numbers pass through; strings like '350 kcal' -> 350. Anything else,
    including inf and nan (json.loads accepts 1e400, Infinity, NaN) -> None.
    """
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return val if math.isfinite(val) else None
    if isinstance(val, str):
        m = _NUMBER.search(val)
        if m:
            num = float(m.group(0))
            if not math.isfinite(num):
                return None
            return int(num) if num.is_integer() else num
    return None


def _positive_int(val, default: int) -> int:
    num = _number_from(val)
    if num is None or num <= 0:
        return default
    return int(round(num))


def _text(val, default: str) -> str:
    if isinstance(val, str) and val.strip():
        return val.strip()
    return default


def _ingredient(item) -> dict:
    if isinstance(item, str) and item.strip():
        return {**DEFAULT_INGREDIENT, "ingredient": item.strip()}
    if not isinstance(item, dict):
        return dict(DEFAULT_INGREDIENT)

    amount = item.get("amount")
    if isinstance(amount, (int, float)) and not isinstance(amount, bool):
        amount = str(amount)
    unit = item.get("unit")
    return {
        "ingredient": _text(item.get("ingredient") or item.get("name"), DEFAULT_INGREDIENT["ingredient"]),
        "amount": _text(amount, DEFAULT_INGREDIENT["amount"]),
        "unit": unit.strip() if isinstance(unit, str) else DEFAULT_INGREDIENT["unit"],
    }


def _ingredients(val) -> list[dict]:
    if not isinstance(val, list) or not val:
        return [dict(DEFAULT_INGREDIENT)]
    return [_ingredient(i) for i in val]


def _instructions(val) -> list[str]:
    if not isinstance(val, list):
        return list(DEFAULT_INSTRUCTIONS)
    steps = [str(s).strip() for s in val if isinstance(s, (str, int, float)) and str(s).strip()]
    return steps or list(DEFAULT_INSTRUCTIONS)


def _nutrition(val) -> dict:
    val = val if isinstance(val, dict) else {}
    out = {}
    for key in NUTRITION_KEYS:
        num = _number_from(val.get(key))
        out[key] = num if num is not None and num >= 0 else 0
    return out


def _difficulty(val) -> str:
    if isinstance(val, str) and val.strip().lower() in Recipe.Difficulty.values:
        return val.strip().lower()
    return DEFAULT_DIFFICULTY


def build_recipe_fields(generated, name: str) -> dict:
    """
    Map an untrusted generator structure to Recipe field values.
    Every field is present in the result; missing or mistyped values get
    the static defaults above. Accepts camelCase (prepTime) or snake_case keys.
    """
    g = generated if isinstance(generated, dict) else {}

    ingredients = g.get("ingredients")
    tags = g.get("tags")

    return {
        "name": _text(g.get("name"), name),
        "type": _text(g.get("type"), DEFAULT_TYPE),
        "cuisine": _text(g.get("cuisine"), DEFAULT_CUISINE),
        "tags": [t for t in tags if isinstance(t, str)] if isinstance(tags, list) else [],
        "ingredients": _ingredients(ingredients),
        "instructions": _instructions(g.get("instructions")),
        "nutrition": _nutrition(g.get("nutrition")),
        "prep_time": _positive_int(g.get("prepTime", g.get("prep_time")), DEFAULT_PREP_TIME),
        "cook_time": _positive_int(g.get("cookTime", g.get("cook_time")), DEFAULT_COOK_TIME),
        "servings": _positive_int(g.get("servings"), DEFAULT_SERVINGS),
        "difficulty": _difficulty(g.get("difficulty")),
    }


def fallback_recipe(name: str) -> dict:
    """Static recipe returned when the generation endpoint can't be used."""
    return {"name": name, **deepcopy(FALLBACK_RECIPE)}
