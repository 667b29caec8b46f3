from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Django app configuration for the Accounts app.

    Owns the per-user preference document, its JSON API and the preferences page.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
