"""
Catalog data models for Recipe Advisor.

Notes:
- Recipes are stored document-style: tags, ingredients, instructions and
  nutrition live in JSON fields, so a generated recipe maps 1:1 to a row.
- Tags are normalised to lowercase on save; option lookups query by
  lowercase term.
- Ingredient names are unique per category, case-insensitively.
"""

from numbers import Number

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Index
from django.db.models.functions import Lower


NUTRITION_KEYS = ("calories", "protein", "carbs", "fat", "fiber")


def normalize_tags(tags) -> list[str]:
    """Strip, lowercase and de-duplicate tags, keeping first-seen order."""
    out: list[str] = []
    for tag in tags or []:
        value = str(tag or "").strip().lower()
        if value and value not in out:
            out.append(value)
    return out


class Recipe(models.Model):
    """
    A recipe in the catalog. Either pre-existing (admin / fixtures) or
    generated on a lookup miss and saved so the next lookup hits.

    `ingredients` is a list of {"ingredient", "amount", "unit"} objects,
    `instructions` an ordered list of step strings, and `nutrition` an
    object with numeric calories/protein/carbs/fat/fiber.
    """

    class Difficulty(models.TextChoices):
        EASY = "easy", "Easy"
        MEDIUM = "medium", "Medium"
        HARD = "hard", "Hard"

    name = models.CharField(max_length=200)
    type = models.CharField(max_length=32, default="complete")
    cuisine = models.CharField(max_length=100, default="any")
    tags = models.JSONField(default=list, blank=True)

    ingredients = models.JSONField(default=list, blank=True)
    instructions = models.JSONField(default=list)
    nutrition = models.JSONField(default=dict, blank=True)

    prep_time = models.PositiveIntegerField(default=15, help_text="Minutes.")
    cook_time = models.PositiveIntegerField(default=30, help_text="Minutes.")
    servings = models.PositiveIntegerField(default=4)
    difficulty = models.CharField(
        max_length=10, choices=Difficulty.choices, default=Difficulty.MEDIUM
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            Index(fields=["name"], name="recipe_name_idx"),
            Index(fields=["cuisine"], name="recipe_cuisine_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.cuisine})"

    def clean(self):
        errors = {}

        if not isinstance(self.ingredients, list):
            errors["ingredients"] = "Ingredients must be a list."
        else:
            for ix, item in enumerate(self.ingredients):
                if not isinstance(item, dict):
                    errors["ingredients"] = f"Ingredient #{ix + 1} must be an object."
                    break
                if not all(isinstance(item.get(k), str) for k in ("ingredient", "amount", "unit")):
                    errors["ingredients"] = (
                        f"Ingredient #{ix + 1} needs string ingredient/amount/unit."
                    )
                    break

        if not isinstance(self.instructions, list) or not self.instructions:
            errors["instructions"] = "Instructions must be a non-empty list."
        elif not all(isinstance(step, str) for step in self.instructions):
            errors["instructions"] = "Every instruction must be a string."

        if not isinstance(self.nutrition, dict):
            errors["nutrition"] = "Nutrition must be an object."
        else:
            for key in NUTRITION_KEYS:
                value = self.nutrition.get(key, 0)
                if isinstance(value, bool) or not isinstance(value, Number):
                    errors["nutrition"] = f"Nutrition '{key}' must be a number."
                    break

        if not isinstance(self.tags, list):
            errors["tags"] = "Tags must be a list."

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        if isinstance(self.tags, list):
            self.tags = normalize_tags(self.tags)
        return super().save(*args, **kwargs)


class Ingredient(models.Model):
    """
    A catalog ingredient, e.g. ("Chicken breast", "protein").
    Case-insensitive uniqueness per category so "Basil"/"basil" don't duplicate.
    """
    name = models.CharField(max_length=100)
    category = models.CharField(
        max_length=50,
        help_text="Grouping used by the builder, e.g. 'base', 'protein', 'vegetable'.",
    )

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                Lower("name"), "category",
                name="uniq_ingredient_name_category_ci",
            ),
        ]
        indexes = [
            Index(fields=["category"], name="ingredient_category_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} [{self.category}]"
