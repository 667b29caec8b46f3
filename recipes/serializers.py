from rest_framework import serializers

from .models import Recipe


class RecipeSerializer(serializers.ModelSerializer):
    """Full recipe, camelCase on the wire."""

    prepTime = serializers.IntegerField(source="prep_time")
    cookTime = serializers.IntegerField(source="cook_time")

    class Meta:
        model = Recipe
        fields = [
            "id", "name", "type", "cuisine", "tags",
            "ingredients", "instructions", "nutrition",
            "prepTime", "cookTime", "servings", "difficulty",
        ]


class RecipeOptionSerializer(serializers.ModelSerializer):
    """Projection used by the option list."""

    prepTime = serializers.IntegerField(source="prep_time")

    class Meta:
        model = Recipe
        fields = ["id", "name", "nutrition", "prepTime", "difficulty"]


def recipe_payload(fields: dict) -> dict:
    """Wire shape for an unsaved recipe, no id (field dict from the defaulting pass)."""
    return {
        "name": fields["name"],
        "type": fields["type"],
        "cuisine": fields["cuisine"],
        "tags": fields["tags"],
        "ingredients": fields["ingredients"],
        "instructions": fields["instructions"],
        "nutrition": fields["nutrition"],
        "prepTime": fields["prep_time"],
        "cookTime": fields["cook_time"],
        "servings": fields["servings"],
        "difficulty": fields["difficulty"],
    }


class CustomRecipeRequestSerializer(serializers.Serializer):
    base = serializers.CharField()
    protein = serializers.CharField()
    vegetables = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    seasonings = serializers.ListField(child=serializers.CharField(), allow_empty=True)
    cookingMethod = serializers.CharField()
    nutritionalTargets = serializers.DictField(required=False, allow_null=True)
    allergies = serializers.ListField(
        child=serializers.CharField(), required=False, allow_empty=True, default=list
    )
