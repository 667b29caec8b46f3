from django.urls import path
from . import views

app_name = "recipes"

urlpatterns = [
    # Recipes
    path("recipes/options/", views.recipe_options, name="recipe_options"),
    path("recipes/by-name/<str:name>/", views.recipe_by_name, name="recipe_by_name"),
    path("recipes/<int:recipe_id>/customize/", views.customize_recipe, name="customize_recipe"),
    path("recipes/custom/", views.create_custom_recipe, name="create_custom_recipe"),

    # Ingredients
    path("ingredients/options/<str:category>/", views.ingredient_options, name="ingredient_options"),
    path(
        "ingredients/recommendations/",
        views.ingredient_recommendations,
        name="ingredient_recommendations",
    ),
]
