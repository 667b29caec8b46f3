from django.apps import AppConfig


class RecipesConfig(AppConfig):
    """App configuration for the recipe catalog and its JSON API."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "recipes"
