from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),

    # JSON API for recipes and ingredients (namespaced)
    path("api/", include(("recipes.urls", "recipes"), namespace="recipes")),

    # Django auth (provides 'login', 'logout', password URLs)
    path("accounts/", include("django.contrib.auth.urls")),

    # /auth/me, /users/<id>/preferences, /preferences/
    path("", include(("accounts.urls", "accounts"), namespace="accounts")),
]
