"""URL configuration for the Registrar console."""

from django.urls import include, path

urlpatterns = [
    path("", include("apps.core.urls")),
    path("locations/", include("apps.locations.urls")),
    path("registrations/", include("apps.registrations.urls")),
]
