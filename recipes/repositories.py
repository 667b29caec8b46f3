"""
Catalog lookups used by the API views.

Tag membership runs as a JSON containment query on backends that support
it (Postgres); SQLite and Oracle can't, so there we filter in Python.
"""

from typing import Optional

from django.db import connection

from .models import Ingredient, Recipe


def recipes_tagged(term: str) -> list[Recipe]:
    """Recipes whose tag set contains `term` (compared lowercase)."""
    term = (term or "").strip().lower()
    if not term:
        return []

    qs = Recipe.objects.order_by("id")
    if connection.features.supports_json_field_contains:
        return list(qs.filter(tags__contains=[term]))
    return [r for r in qs if isinstance(r.tags, list) and term in r.tags]


def recipe_named(name: str) -> Optional[Recipe]:
    """First recipe whose name contains `name`, ignoring case."""
    name = (name or "").strip()
    if not name:
        return None
    return Recipe.objects.filter(name__icontains=name).order_by("id").first()


def ingredients_in_category(category: str) -> list[Ingredient]:
    return list(Ingredient.objects.filter(category=category).order_by("name"))
