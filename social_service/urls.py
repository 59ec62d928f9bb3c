"""Root URL configuration for the social graph service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/social/", include("social.urls")),
]
