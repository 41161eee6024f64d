"""
URL configuration for system API endpoints.
"""

from django.urls import path

from api.v1.system import views

urlpatterns = [
    path("cpu-cores", views.CpuCoresView.as_view(), name="cpu-cores"),
]
