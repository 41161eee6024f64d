"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class LicenseActivationRequestSerializer(serializers.Serializer):
    """Serializer for license activation request."""

    licenseKey = serializers.CharField(required=True, allow_blank=False, max_length=64, trim_whitespace=True)


class ActivationRecordSerializer(serializers.Serializer):
    """Serializer for a deployment's activation record."""

    success = serializers.SerializerMethodField()
    activationDate = serializers.DateTimeField(source="activation_date")
    years = serializers.IntegerField()

    def get_success(self, _obj) -> bool:
        """Successful responses always carry ``success: true``."""
        return True


class LicenseActivationResponseSerializer(ActivationRecordSerializer):
    """Serializer for license activation response."""

    alreadyActive = serializers.BooleanField(source="already_active")


class ErrorResponseSerializer(serializers.Serializer):
    """Serializer documenting failed responses."""

    success = serializers.BooleanField(default=False)
    message = serializers.CharField(required=False)
    code = serializers.CharField(required=False)
