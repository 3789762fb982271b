"""URL configuration for registrations app."""

from django.urls import path

from . import views

app_name = "registrations"

urlpatterns = [
    path("upload/", views.CertificateUploadView.as_view(), name="upload"),
    path("<slug:kind>/", views.RegistrationListView.as_view(), name="list"),
    path("<slug:kind>/new/", views.registration_create, name="create"),
    path("<slug:kind>/export/", views.ExportView.as_view(), name="export"),
    path("<slug:kind>/<str:entity_id>/", views.registration_detail, name="detail"),
    path("<slug:kind>/<str:entity_id>/edit/", views.registration_edit, name="edit"),
    path("<slug:kind>/<str:entity_id>/approve/", views.ApproveView.as_view(), name="approve"),
    path("<slug:kind>/<str:entity_id>/reject/", views.registration_reject, name="reject"),
    path("<slug:kind>/<str:entity_id>/delete/", views.registration_delete, name="delete"),
]
