"""
URL configuration for LicenseLedgerService project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from core.views import HealthDBView, HealthView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health", HealthView.as_view(), name="health"),
    path("health/db", HealthDBView.as_view(), name="health-db"),
    # API endpoints
    path("api/v1/license/", include(("api.v1.license.urls", "license"))),
    path("api/v1/system/", include(("api.v1.system.urls", "system"))),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    # ReDoc
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
