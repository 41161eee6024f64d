"""
System API views.

Reports the CPU of the host the service runs on, which is the machine the
desktop client enforces its core limit against.
"""

from django.utils import timezone
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.instrumentation import get_tracer
from core.system_info import detect_cpu

tracer = get_tracer(__name__)


class CpuCoresView(APIView):
    """View for the host's CPU core count."""

    @extend_schema(
        operation_id="cpu_cores",
        summary="Get CPU Cores",
        tags=["System API"],
        responses={
            200: inline_serializer(
                name="CpuCoresResponse",
                fields={
                    "success": serializers.BooleanField(),
                    "cores": serializers.IntegerField(),
                    "cpuModel": serializers.CharField(allow_null=True),
                    "timestamp": serializers.DateTimeField(),
                },
            )
        },
    )
    def get(self, _request: Request) -> Response:
        """Return logical core count and CPU model."""
        with tracer.start_as_current_span("cpu_cores") as span:
            info = detect_cpu()
            span.set_attribute("cores", info["cores"])
            return Response(
                {
                    "success": True,
                    "cores": info["cores"],
                    "cpuModel": info["cpu_model"],
                    "timestamp": timezone.now().isoformat(),
                },
                status=status.HTTP_200_OK,
            )
