"""URL configuration for the notifier service project."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/outbox/", include("outbox.urls")),
]
