"""
API exception handlers.

This module renders every API failure as
``{"success": false, "message": ..., "code": ...}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ActivationNotFoundError,
    DomainException,
    InvalidLicenseKeyError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)


def error_body(message: Optional[str] = None, code: Optional[str] = None) -> Dict[str, Any]:
    """Build the JSON body used for every failed API response."""
    body: Dict[str, Any] = {"success": False}
    if message:
        body["message"] = message
    if code:
        body["code"] = code
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = exc.detail
        if isinstance(detail, dict):
            detail = detail.get("detail", exc.default_detail)
        elif isinstance(detail, list):
            detail = detail[0] if detail else exc.default_detail
        response.data = error_body(str(detail or exc.default_detail), code)
    elif isinstance(exc, Http404):
        response = Response(
            error_body("Resource not found", "NOT_FOUND"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ActivationNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidLicenseKeyError):
        errors_total.labels(error_type=exc.code, endpoint="license_activation").inc()

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.message, exc.code), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    request = context.get("request")
    errors_total.labels(
        error_type=type(exc).__name__,
        endpoint=request.path if request else "unknown",
    ).inc()
    return Response(
        error_body("An internal error occurred", "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
