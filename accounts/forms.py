from django import forms

from .preferences import SECTION_PLACEHOLDERS, SECTIONS, PreferenceDraft


class PreferencesForm(forms.Form):
    """
    The preferences page form.

    The four lists travel as hidden JSON fields so the page carries its own
    editing state between add/remove round-trips; one text input per
    section holds the value being added.
    """

    allergies = forms.JSONField(required=False, widget=forms.HiddenInput)
    dietary_restrictions = forms.JSONField(required=False, widget=forms.HiddenInput)
    favorite_ingredients = forms.JSONField(required=False, widget=forms.HiddenInput)
    disliked_ingredients = forms.JSONField(required=False, widget=forms.HiddenInput)

    new_allergies = forms.CharField(required=False, max_length=100, strip=False)
    new_dietary_restrictions = forms.CharField(required=False, max_length=100, strip=False)
    new_favorite_ingredients = forms.CharField(required=False, max_length=100, strip=False)
    new_disliked_ingredients = forms.CharField(required=False, max_length=100, strip=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for section in SECTIONS:
            self.fields[f"new_{section}"].widget.attrs.update({
                "placeholder": SECTION_PLACEHOLDERS[section],
                "autocomplete": "off",
            })

    @classmethod
    def for_draft(cls, draft: PreferenceDraft, pending: dict | None = None) -> "PreferencesForm":
        """Unbound form showing `draft`, with any un-added input text kept in place."""
        initial = draft.as_dict()
        for section, text in (pending or {}).items():
            initial[f"new_{section}"] = text
        return cls(initial=initial)

    def _clean_list(self, name: str) -> list[str]:
        value = self.cleaned_data.get(name)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise forms.ValidationError("Expected a list of text values.")
        return value

    def clean_allergies(self):
        return self._clean_list("allergies")

    def clean_dietary_restrictions(self):
        return self._clean_list("dietary_restrictions")

    def clean_favorite_ingredients(self):
        return self._clean_list("favorite_ingredients")

    def clean_disliked_ingredients(self):
        return self._clean_list("disliked_ingredients")

    def draft(self) -> PreferenceDraft:
        return PreferenceDraft(**{s: list(self.cleaned_data[s]) for s in SECTIONS})

    def pending(self) -> dict:
        return {s: self.cleaned_data.get(f"new_{s}") or "" for s in SECTIONS}
