"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path(
        "activation",
        views.LicenseActivationView.as_view(),
        name="activation",
    ),
    path(
        "status",
        views.LicenseStatusView.as_view(),
        name="status",
    ),
]
