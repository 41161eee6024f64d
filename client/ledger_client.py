"""
HTTP client for the license ledger API.

Every call is bounded by the configured timeout. Failures are raised as
``LedgerClientError`` carrying a ``FailureCategory`` so callers can pick a
message without parsing exception text.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class FailureCategory(Enum):
    """Why a ledger call failed."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNREACHABLE = "unreachable"
    MALFORMED_RESPONSE = "malformed_response"


class LedgerClientError(Exception):
    """Raised when a ledger call does not produce a usable response."""

    def __init__(self, category: FailureCategory, message: str, status_code: Optional[int] = None):
        self.category = category
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class ServerRecord:
    """Activation state as reported by the ledger."""

    activation_date: datetime
    years: int
    already_active: bool = False


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _category_for_status(status_code: int) -> FailureCategory:
    if status_code == 404:
        return FailureCategory.NOT_FOUND
    if status_code >= 500:
        return FailureCategory.SERVER_ERROR
    return FailureCategory.BAD_REQUEST


class LedgerClient:
    """Thin wrapper over the ledger's JSON endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: API root, e.g. ``http://localhost:7861/api/v1``
            timeout_seconds: Connect and read timeout per call
            session: Optional requests session (for connection reuse or tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def activate(self, license_key: str) -> ServerRecord:
        """
        Submit a license key for activation.

        Args:
            license_key: Normalized license key

        Returns:
            ServerRecord with the deployment's activation date and years

        Raises:
            LedgerClientError: On transport failure, error status or bad body
        """
        body = self._request("POST", "/license/activation", json={"licenseKey": license_key})
        return self._record_from(body)

    def status(self) -> Optional[ServerRecord]:
        """
        Read the deployment's activation record.

        Returns:
            ServerRecord, or None when no key was ever activated

        Raises:
            LedgerClientError: On transport failure, error status or bad body
        """
        try:
            body = self._request("GET", "/license/status")
        except LedgerClientError as e:
            if e.category is FailureCategory.NOT_FOUND:
                return None
            raise
        return self._record_from(body)

    def cpu_cores(self) -> int:
        """
        Read the ledger host's logical core count.

        Raises:
            LedgerClientError: On transport failure, error status or bad body
        """
        body = self._request("GET", "/system/cpu-cores")
        cores = body.get("cores")
        if not isinstance(cores, int) or isinstance(cores, bool) or cores <= 0:
            raise LedgerClientError(
                FailureCategory.MALFORMED_RESPONSE, "CPU core count missing from response"
            )
        return cores

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout_seconds, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning("License server unreachable at %s: %s", url, e)
            raise LedgerClientError(FailureCategory.UNREACHABLE, str(e)) from e

        if not response.ok:
            logger.warning("License server returned %s for %s %s", response.status_code, method, path)
            raise LedgerClientError(
                _category_for_status(response.status_code),
                f"server {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise LedgerClientError(
                FailureCategory.MALFORMED_RESPONSE,
                "Response is not JSON",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict) or body.get("success") is not True:
            raise LedgerClientError(
                FailureCategory.MALFORMED_RESPONSE,
                "Response does not report success",
                status_code=response.status_code,
            )
        return body

    @staticmethod
    def _record_from(body: Dict[str, Any]) -> ServerRecord:
        years = body.get("years")
        activation_date = body.get("activationDate")
        if not isinstance(years, int) or isinstance(years, bool) or years < 1:
            raise LedgerClientError(FailureCategory.MALFORMED_RESPONSE, "Invalid years in response")
        if not isinstance(activation_date, str):
            raise LedgerClientError(
                FailureCategory.MALFORMED_RESPONSE, "Missing activationDate in response"
            )
        try:
            parsed = _parse_timestamp(activation_date)
        except ValueError as e:
            raise LedgerClientError(
                FailureCategory.MALFORMED_RESPONSE, "Invalid activationDate in response"
            ) from e
        return ServerRecord(
            activation_date=parsed,
            years=years,
            already_active=bool(body.get("alreadyActive", False)),
        )
