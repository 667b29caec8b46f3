import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .forms import PreferencesForm
from .models import PREFERENCE_FIELDS, UserPreferences
from .preferences import SECTION_LABELS, SECTIONS, PreferenceDraft

logger = logging.getLogger(__name__)

ADD_PENDING = "pending"


# =============================================================================
# JSON API
# =============================================================================

@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me(request):
    """Current user with their preference document."""
    user = request.user
    prefs = UserPreferences.for_user(user)
    return Response({
        "user": {
            "id": user.id,
            "username": user.get_username(),
            "email": user.email,
            "preferences": prefs.as_payload(),
        }
    })


@api_view(["PUT"])
@permission_classes([IsAuthenticated])
def update_preferences(request, user_id: int):
    """
    Replace the user's preferences with the four submitted lists.
    A list left out of the body is stored empty; nothing is merged.
    """
    if request.user.id != user_id:
        return Response({"error": "You can only update your own preferences"},
                        status=status.HTTP_403_FORBIDDEN)

    body = request.data if hasattr(request.data, "get") else {}
    lists = {}
    for field, wire in PREFERENCE_FIELDS.items():
        value = body.get(wire, [])
        if value is None:
            value = []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            return Response({"error": f"{wire} must be a list of strings"},
                            status=status.HTTP_400_BAD_REQUEST)
        lists[field] = value

    try:
        prefs = UserPreferences.for_user(request.user)
        prefs.replace(lists)
    except DatabaseError:
        logger.exception("Error saving preferences for user %s", user_id)
        return Response({"error": "Failed to save preferences"},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(prefs.as_payload())


# =============================================================================
# Preferences page
# =============================================================================

def _render_page(request, form: PreferencesForm, draft: PreferenceDraft, status_code: int = 200):
    sections = [
        {
            "key": s,
            "label": SECTION_LABELS[s],
            "items": draft.items(s),
            "input": form[f"new_{s}"],
        }
        for s in SECTIONS
    ]
    return render(
        request,
        "accounts/preferences.html",
        {"form": form, "sections": sections},
        status=status_code,
    )


@login_required
@require_http_methods(["GET", "POST"])
def preferences_page(request):
    """
    Edit preferences.

    GET loads the stored lists. POST with `add=<section>`, `add=pending`
    (implicit submit: every non-blank input) or `remove_<section>=<value>`
    edits the in-page lists only; POST with
    `action=save` overwrites the stored document and redirects back.
    """
    if request.method == "GET":
        draft = PreferenceDraft.from_preferences(UserPreferences.for_user(request.user))
        return _render_page(request, PreferencesForm.for_draft(draft), draft)

    form = PreferencesForm(request.POST)
    if not form.is_valid():
        return HttpResponseBadRequest("Invalid preferences form.")

    draft = form.draft()
    pending = form.pending()

    section = request.POST.get("add")
    if section:
        # Enter in a text box submits add=pending: take whatever was typed anywhere
        targets = SECTIONS if section == ADD_PENDING else (section,)
        if section != ADD_PENDING and section not in SECTIONS:
            return HttpResponseBadRequest("Unknown preference section.")
        for s in targets:
            if draft.add(s, pending[s]):
                pending[s] = ""
        return _render_page(request, PreferencesForm.for_draft(draft, pending), draft)

    for s in SECTIONS:
        if f"remove_{s}" in request.POST:
            draft.remove(s, request.POST[f"remove_{s}"])
            return _render_page(request, PreferencesForm.for_draft(draft, pending), draft)

    if request.POST.get("action") == "save":
        try:
            draft.save_to(UserPreferences.for_user(request.user))
        except DatabaseError:
            logger.exception("Error saving preferences for user %s", request.user.pk)
            messages.error(request, "Failed to save preferences. Please try again.")
            return _render_page(request, PreferencesForm.for_draft(draft, pending), draft)
        messages.success(request, "Preferences saved successfully!")
        return redirect("accounts:preferences")

    return HttpResponseBadRequest("Unknown action.")
