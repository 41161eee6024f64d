"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import ActivationRecord


@admin.register(ActivationRecord)
class ActivationRecordAdmin(admin.ModelAdmin):
    """Admin interface for ActivationRecord model (read-only)."""

    list_display = [
        "deployment_id",
        "activation_date",
        "years",
        "key_count_display",
        "updated_at",
    ]
    search_fields = ["deployment_id"]
    readonly_fields = [
        "deployment_id",
        "activation_date",
        "years",
        "hashes",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("deployment_id", "activation_date", "years"),
            },
        ),
        (
            "Credited Keys",
            {
                "fields": ("hashes",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("updated_at",),
                "classes": ("collapse",),
            },
        ),
    )

    def key_count_display(self, obj):
        """Display number of credited key hashes."""
        return format_html("<strong>{}</strong>", len(obj.hashes))

    key_count_display.short_description = "Keys"

    def has_add_permission(self, request):
        """Records are only created by key submissions."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Records are never expunged."""
        return False
