"""
Observability middleware.

Assigns each request a correlation id, picks up the active trace context and
writes one structured log line when the request starts and one when it ends.
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional, Tuple

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

QUIET_PATH_PREFIXES = ("/health",)


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Health probes are logged at DEBUG so they do not drown ledger traffic.
    Request bodies are never logged, so license keys do not reach the logs.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.deployment_id = getattr(settings, "LICENSE_DEPLOYMENT_ID", None)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with X-Correlation-ID (and X-Trace-ID when tracing)
        """
        correlation_id = str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        trace_id, span_id = self._trace_context()
        if trace_id:
            request.trace_id = trace_id  # type: ignore

        context = {
            "correlation_id": correlation_id,
            "deployment_id": self.deployment_id,
            "method": request.method,
            "path": request.path,
        }
        if trace_id:
            context.update(trace_id=trace_id, span_id=span_id)

        quiet = request.path.startswith(QUIET_PATH_PREFIXES)
        logger.log(
            logging.DEBUG if quiet else logging.INFO,
            "Request started",
            extra={**context, "remote_addr": request.META.get("REMOTE_ADDR")},
        )

        started = time.monotonic()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **context,
                    "request_status": "exception",
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.monotonic() - started) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.monotonic() - started
        request_status = _outcome(response.status_code)
        self._log_completion(context, response.status_code, request_status, duration, quiet)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = request_status
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    @staticmethod
    def _trace_context() -> Tuple[Optional[str], Optional[str]]:
        span_context = trace.get_current_span().get_span_context()
        if not span_context.is_valid:
            return None, None
        return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)

    @staticmethod
    def _log_completion(
        context: Dict, status_code: int, request_status: str, duration: float, quiet: bool
    ) -> None:
        extra = {
            **context,
            "request_status": request_status,
            "status_code": status_code,
            "duration_ms": round(duration * 1000, 2),
        }
        if request_status == "server_error":
            logger.error("Request completed with server error", extra=extra)
        elif request_status == "client_error":
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.log(
                logging.DEBUG if quiet else logging.INFO,
                "Request completed successfully",
                extra=extra,
            )
