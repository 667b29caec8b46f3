"""
JSON API for recipe and ingredient lookups.

Every endpoint follows the same chain: catalog lookup, then (on a miss)
one call to the generation endpoint, then best-effort JSON recovery.
Lookups degrade to an empty list or the static fallback recipe instead of
failing; endpoints that create something on the caller's behalf report
generation failures as 500s.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from . import repositories
from .models import Recipe, normalize_tags
from .serializers import (
    CustomRecipeRequestSerializer,
    RecipeOptionSerializer,
    RecipeSerializer,
    recipe_payload,
)
from .services import llm, prompts
from .services.defaults import build_recipe_fields, fallback_recipe
from .services.extraction import extract_json_array, extract_json_object

logger = logging.getLogger(__name__)

CREATE_OWN_OPTION = {"name": "Create my own recipe", "description": "Customize your own dish"}


def _error(message: str, code: int, **extra) -> Response:
    return Response({"error": message, **extra}, status=code)


def _generated_list(prompt: str) -> list:
    """One generation call -> first JSON array in the reply, or [] on any failure."""
    try:
        text = llm.generate_text(prompt)
    except llm.GenerationError as e:
        logger.warning("Generation failed; returning no options. (%s)", e)
        return []
    options = extract_json_array(text)
    if options is None:
        logger.warning("No JSON array in generated options.")
        return []
    return options


# =============================================================================
# Recipes
# =============================================================================

@api_view(["GET"])
def recipe_options(request):
    """
    Options for a cuisine and/or dish type.

    Stored recipes tagged with "<cuisine> <dishType>" win; otherwise five
    generated ideas plus the "create my own" entry. Nothing is persisted.
    """
    cuisine = (request.query_params.get("cuisine") or "").strip()
    dish_type = (request.query_params.get("dishType") or "").strip()
    search = " ".join(p for p in (cuisine, dish_type) if p)
    if not search:
        return _error("A cuisine or dishType is required", status.HTTP_400_BAD_REQUEST)

    try:
        stored = repositories.recipes_tagged(search.lower())
        if stored:
            return Response(RecipeOptionSerializer(stored, many=True).data)

        options = _generated_list(prompts.recipe_options_prompt(search))
        if not options:
            return Response([])
        return Response([*options, CREATE_OWN_OPTION])
    except Exception:
        logger.exception("Error getting recipe options")
        return _error("Failed to get recipe options", status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(["GET"])
def recipe_by_name(request, name: str):
    """
    Stored recipe by (case-insensitive, partial) name, generating and
    saving one on a miss. Never fails: generator trouble yields the static
    fallback recipe, and a failed save still returns the generated record.
    """
    try:
        recipe = repositories.recipe_named(name)
        if recipe:
            return Response(RecipeSerializer(recipe).data)

        generated = llm.generate_recipe("any", name)
    except llm.GenerationError as e:
        logger.warning("Recipe generation failed for %r; serving fallback. (%s)", name, e)
        return Response(recipe_payload(fallback_recipe(name)))
    except Exception:
        logger.exception("Error getting recipe %r", name)
        return Response(recipe_payload(fallback_recipe(name)))

    fields = build_recipe_fields(generated, name)
    try:
        recipe = Recipe(**fields)
        recipe.full_clean()
        recipe.save()
    except (ValidationError, DatabaseError) as e:
        logger.error("Recipe validation error for %r: %s", name, e)
        return Response(recipe_payload(fields))

    return Response(RecipeSerializer(recipe).data)


@api_view(["POST", "PUT"])
def customize_recipe(request, recipe_id: int):
    """Rework a stored recipe with free-text customizations. Not persisted."""
    customizations = request.data.get("customizations") if hasattr(request.data, "get") else None
    if not isinstance(customizations, list) or not customizations:
        return _error("Customizations are required", status.HTTP_400_BAD_REQUEST)
    customizations = [str(c).strip() for c in customizations if str(c).strip()]
    if not customizations:
        return _error("Customizations are required", status.HTTP_400_BAD_REQUEST)

    original = Recipe.objects.filter(pk=recipe_id).first()
    if original is None:
        return _error("Recipe not found", status.HTTP_404_NOT_FOUND)

    try:
        customized = llm.generate_recipe("custom", original.name, customizations)
    except llm.GenerationError as e:
        logger.warning("Customization of recipe %s failed: %s", recipe_id, e)
        return _error("Failed to customize recipe", status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Error customizing recipe %s", recipe_id)
        return _error("Failed to customize recipe", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(customized)


@api_view(["POST"])
def create_custom_recipe(request):
    """
    Build a recipe from the user's picks, save it tagged 'custom' plus every
    component, and return it (201). When the model's reply can't be parsed
    the raw text comes back in the 500 body for diagnosis.
    """
    form = CustomRecipeRequestSerializer(data=request.data)
    if not form.is_valid():
        return Response({"error": "Invalid custom recipe request", "fields": form.errors},
                        status=status.HTTP_400_BAD_REQUEST)
    data = form.validated_data

    prompt = prompts.custom_recipe_prompt(
        base=data["base"],
        protein=data["protein"],
        vegetables=data["vegetables"],
        seasonings=data["seasonings"],
        cooking_method=data["cookingMethod"],
        nutritional_targets=data.get("nutritionalTargets"),
        allergies=data.get("allergies"),
    )

    try:
        text = llm.generate_text(prompt)
    except llm.GenerationError as e:
        logger.warning("Custom recipe generation failed: %s", e)
        return _error("Failed to create custom recipe", status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Error creating custom recipe")
        return _error("Failed to create custom recipe", status.HTTP_500_INTERNAL_SERVER_ERROR)

    generated = extract_json_object(text)
    if generated is None:
        logger.error("Error parsing generated custom recipe")
        return _error("Failed to parse recipe", status.HTTP_500_INTERNAL_SERVER_ERROR,
                      rawResponse=text)

    name = f"{data['protein']} {data['base']}".strip()
    fields = build_recipe_fields(generated, name)
    fields["type"] = "complete"
    fields["tags"] = normalize_tags([
        "custom",
        data["base"],
        data["protein"],
        *data["vegetables"],
        *data["seasonings"],
        data["cookingMethod"],
    ])

    try:
        recipe = Recipe(**fields)
        recipe.full_clean()
        recipe.save()
    except (ValidationError, DatabaseError) as e:
        logger.error("Custom recipe failed validation: %s", e)
        return _error("Failed to parse recipe", status.HTTP_500_INTERNAL_SERVER_ERROR,
                      rawResponse=text)

    return Response(RecipeSerializer(recipe).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Ingredients
# =============================================================================

@api_view(["GET"])
def ingredient_options(request, category: str):
    """Catalog ingredients in `category`, else eight generated suggestions."""
    try:
        stored = repositories.ingredients_in_category(category)
        if stored:
            return Response([{"id": i.id, "name": i.name} for i in stored])
        return Response(_generated_list(prompts.ingredient_options_prompt(category)))
    except Exception:
        logger.exception("Error getting %s options", category)
        return _error(f"Failed to get {category} options", status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(["GET"])
def ingredient_recommendations(request):
    """Five generated picks for `category` that pair with `base` and the current picks."""
    base = (request.query_params.get("base") or "").strip()
    category = (request.query_params.get("category") or "").strip()
    current = (request.query_params.get("currentIngredients") or "").strip()
    if not base or not category:
        return _error("base and category are required", status.HTTP_400_BAD_REQUEST)

    try:
        prompt = prompts.ingredient_recommendations_prompt(category, base, current)
        return Response(_generated_list(prompt))
    except Exception:
        logger.exception("Error getting %s recommendations", category)
        return _error(f"Failed to get {category} recommendations",
                      status.HTTP_500_INTERNAL_SERVER_ERROR)
