"""
License API views.

These endpoints are used by the desktop client to:
- Submit a license key to the activation ledger
- Read the deployment's accumulated activation record
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.submit_license_key import SubmitLicenseKeyCommand
from activations.application.dto.activation_dto import ActivationFound
from activations.application.handlers.get_activation_status_handler import (
    GetActivationStatusHandler,
)
from activations.application.handlers.submit_license_key_handler import SubmitLicenseKeyHandler
from activations.application.queries.get_activation_status import GetActivationStatusQuery
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from api.exceptions import error_body
from api.v1.license.serializers import (
    ActivationRecordSerializer,
    ErrorResponseSerializer,
    LicenseActivationRequestSerializer,
    LicenseActivationResponseSerializer,
)
from core.domain.exceptions import InvalidLicenseKeyError
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.services.license_key_service import get_key_verifier

# Initialize repositories (in production, use DI container)
_activation_repo = DjangoActivationRepository()

tracer = get_tracer(__name__)


class LicenseActivationView(APIView):
    """View for submitting license keys to the ledger."""

    @extend_schema(
        operation_id="activate_license_key",
        summary="Activate License Key",
        description=(
            "Verify a license key and credit it to this deployment's activation record. "
            "Each distinct key adds one year; resubmitting a credited key changes nothing."
        ),
        tags=["License API"],
        request=LicenseActivationRequestSerializer,
        responses={
            200: LicenseActivationResponseSerializer,
            400: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Submit a license key."""
        return async_to_sync(self._handle_activation)(request)

    async def _handle_activation(self, request: Request) -> Response:
        """Async handler for license key submission."""
        with tracer.start_as_current_span("activate_license_key") as span:
            span.set_attribute("operation", "activate_license_key")

            serializer = LicenseActivationRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "licenseKey required"))
                return Response(
                    error_body("licenseKey required", "VALIDATION_ERROR"),
                    status=status.HTTP_400_BAD_REQUEST,
                )

            deployment_id = settings.LICENSE_DEPLOYMENT_ID
            span.set_attribute("deployment_id", deployment_id)

            handler = SubmitLicenseKeyHandler(
                activation_repository=_activation_repo,
                verifier=get_key_verifier(),
            )
            command = SubmitLicenseKeyCommand(
                license_key=serializer.validated_data["licenseKey"],
                deployment_id=deployment_id,
            )

            try:
                result = await handler.handle(command)
            except InvalidLicenseKeyError as e:
                span.set_attribute("error", e.reason)
                span.set_status(Status(StatusCode.ERROR, e.message))
                raise

            span.set_attribute("years", result.years)
            span.set_attribute("already_active", result.already_active)
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseActivationResponseSerializer(result).data,
                status=status.HTTP_200_OK,
            )


class LicenseStatusView(APIView):
    """View for reading the deployment's activation record."""

    @extend_schema(
        operation_id="license_status",
        summary="Get License Status",
        description="Return the activation date and accumulated years of this deployment.",
        tags=["License API"],
        responses={
            200: ActivationRecordSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def get(self, request: Request) -> Response:
        """Get the activation record."""
        return async_to_sync(self._handle_status)(request)

    async def _handle_status(self, _request: Request) -> Response:
        """Async handler for license status."""
        with tracer.start_as_current_span("license_status") as span:
            deployment_id = settings.LICENSE_DEPLOYMENT_ID
            span.set_attribute("deployment_id", deployment_id)

            handler = GetActivationStatusHandler(activation_repository=_activation_repo)
            result = await handler.handle(GetActivationStatusQuery(deployment_id=deployment_id))

            if not isinstance(result, ActivationFound):
                span.set_attribute("found", False)
                return Response(error_body(), status=status.HTTP_404_NOT_FOUND)

            span.set_attribute("found", True)
            return Response(ActivationRecordSerializer(result.record).data, status=status.HTTP_200_OK)
