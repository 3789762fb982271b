"""URL configuration for locations app."""

from django.urls import path

from . import views

app_name = "locations"

urlpatterns = [
    path("districts/", views.DistrictOptionsView.as_view(), name="district_options"),
]
