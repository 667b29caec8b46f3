from django.contrib import admin
from .models import Ingredient, Recipe


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    """Catalog recipes, including the ones saved after generation."""

    list_display = ("name", "cuisine", "type", "difficulty", "prep_time", "created_at")
    search_fields = ("name", "cuisine")
    list_filter = ("difficulty", "type", "cuisine")


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    list_display = ("name", "category")
    search_fields = ("name",)
    list_filter = ("category",)
