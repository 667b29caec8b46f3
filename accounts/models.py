from django.conf import settings
from django.db import models


# model field -> wire key
PREFERENCE_FIELDS = {
    "allergies": "allergies",
    "dietary_restrictions": "dietaryRestrictions",
    "favorite_ingredients": "favoriteIngredients",
    "disliked_ingredients": "dislikedIngredients",
}


class UserPreferences(models.Model):
    """
    Dietary preferences owned by one user: four lists of free-text tags.
    Always replaced wholesale; there is no per-item merge.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="preferences",
    )
    allergies = models.JSONField(default=list, blank=True)
    dietary_restrictions = models.JSONField(default=list, blank=True)
    favorite_ingredients = models.JSONField(default=list, blank=True)
    disliked_ingredients = models.JSONField(default=list, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "user preferences"

    def __str__(self) -> str:
        return f"Preferences<{self.user}>"

    @classmethod
    def for_user(cls, user) -> "UserPreferences":
        prefs, _ = cls.objects.get_or_create(user=user)
        return prefs

    def as_payload(self) -> dict:
        return {wire: list(getattr(self, field) or []) for field, wire in PREFERENCE_FIELDS.items()}

    def replace(self, lists: dict) -> None:
        """Overwrite all four lists from a {model_field: [str]} mapping and save."""
        for field in PREFERENCE_FIELDS:
            setattr(self, field, list(lists.get(field) or []))
        self.save()
