"""
Editable preference state for the preferences page.

PreferenceDraft holds the four lists while the user edits them. Adds are
trimmed and ignore blanks and duplicates; removing something that isn't
there does nothing. Nothing is written until the page's explicit save.
"""

from dataclasses import dataclass, field

from .models import PREFERENCE_FIELDS, UserPreferences

SECTIONS = tuple(PREFERENCE_FIELDS)

SECTION_LABELS = {
    "allergies": "Allergies",
    "dietary_restrictions": "Dietary Restrictions",
    "favorite_ingredients": "Favorite Ingredients",
    "disliked_ingredients": "Disliked Ingredients",
}

SECTION_PLACEHOLDERS = {
    "allergies": "Add an allergy (e.g., peanuts, shellfish)",
    "dietary_restrictions": "Add a dietary restriction (e.g., vegetarian, vegan)",
    "favorite_ingredients": "Add a favorite ingredient",
    "disliked_ingredients": "Add a disliked ingredient",
}


@dataclass
class PreferenceDraft:
    allergies: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    favorite_ingredients: list[str] = field(default_factory=list)
    disliked_ingredients: list[str] = field(default_factory=list)

    @classmethod
    def from_preferences(cls, prefs: UserPreferences) -> "PreferenceDraft":
        return cls(**{s: list(getattr(prefs, s) or []) for s in SECTIONS})

    def items(self, section: str) -> list[str]:
        if section not in SECTIONS:
            raise KeyError(section)
        return getattr(self, section)

    def add(self, section: str, value: str) -> bool:
        """Append the trimmed value; returns False (no-op) for blanks and duplicates."""
        items = self.items(section)
        value = (value or "").strip()
        if not value or value in items:
            return False
        items.append(value)
        return True

    def remove(self, section: str, value: str) -> bool:
        items = self.items(section)
        if value not in items:
            return False
        setattr(self, section, [i for i in items if i != value])
        return True

    def as_dict(self) -> dict:
        return {s: list(getattr(self, s)) for s in SECTIONS}

    def save_to(self, prefs: UserPreferences) -> None:
        prefs.replace(self.as_dict())
