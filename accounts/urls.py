from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("auth/me", views.me, name="me"),
    path("users/<int:user_id>/preferences", views.update_preferences, name="update_preferences"),
    path("preferences/", views.preferences_page, name="preferences"),
]
