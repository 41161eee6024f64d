"""
Unit tests for LedgerClient.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from client.ledger_client import FailureCategory, LedgerClient, LedgerClientError


def make_response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return LedgerClient("http://ledger.local/api/v1/", timeout_seconds=3, session=session)


class TestLedgerClient:
    """Tests for LedgerClient."""

    def test_activate_posts_key(self, client, session):
        """Test activation request and parsed record."""
        session.request.return_value = make_response(
            body={
                "success": True,
                "activationDate": "2024-01-15T10:00:00Z",
                "years": 2,
                "alreadyActive": True,
            }
        )

        record = client.activate("KEY")

        session.request.assert_called_once_with(
            "POST",
            "http://ledger.local/api/v1/license/activation",
            timeout=3,
            json={"licenseKey": "KEY"},
        )
        assert record.activation_date == datetime(2024, 1, 15, 10, tzinfo=timezone.utc)
        assert record.years == 2
        assert record.already_active is True

    def test_status_not_found_is_none(self, client, session):
        """Test 404 on status means no record."""
        session.request.return_value = make_response(404, {"success": False})
        assert client.status() is None

    def test_status_record(self, client, session):
        """Test status parses the record."""
        session.request.return_value = make_response(
            body={"success": True, "activationDate": "2024-01-15T10:00:00+00:00", "years": 1}
        )
        record = client.status()
        assert record.years == 1
        assert record.already_active is False

    @pytest.mark.parametrize(
        "status_code,category",
        [
            (400, FailureCategory.BAD_REQUEST),
            (404, FailureCategory.NOT_FOUND),
            (500, FailureCategory.SERVER_ERROR),
            (503, FailureCategory.SERVER_ERROR),
        ],
    )
    def test_error_status_categories(self, client, session, status_code, category):
        """Test HTTP errors are classified."""
        session.request.return_value = make_response(status_code, {"success": False})

        with pytest.raises(LedgerClientError) as exc_info:
            client.activate("KEY")

        assert exc_info.value.category is category
        assert exc_info.value.status_code == status_code

    @pytest.mark.parametrize(
        "exc",
        [requests.exceptions.ConnectionError("refused"), requests.exceptions.Timeout("slow")],
    )
    def test_transport_failures_are_unreachable(self, client, session, exc):
        """Test connection errors and timeouts."""
        session.request.side_effect = exc

        with pytest.raises(LedgerClientError) as exc_info:
            client.activate("KEY")

        assert exc_info.value.category is FailureCategory.UNREACHABLE

    @pytest.mark.parametrize(
        "response",
        [
            make_response(json_error=True),
            make_response(body=["not", "a", "dict"]),
            make_response(body={"success": False}),
            make_response(body={"success": True, "years": 1}),
            make_response(body={"success": True, "activationDate": "yesterday", "years": 1}),
            make_response(body={"success": True, "activationDate": "2024-01-15", "years": 0}),
        ],
    )
    def test_malformed_responses(self, client, session, response):
        """Test bodies that cannot be trusted."""
        session.request.return_value = response

        with pytest.raises(LedgerClientError) as exc_info:
            client.activate("KEY")

        assert exc_info.value.category is FailureCategory.MALFORMED_RESPONSE

    def test_cpu_cores(self, client, session):
        """Test core count endpoint."""
        session.request.return_value = make_response(
            body={"success": True, "cores": 8, "cpuModel": None, "timestamp": "x"}
        )
        assert client.cpu_cores() == 8

    def test_cpu_cores_rejects_zero(self, client, session):
        """Test non-positive core counts are malformed."""
        session.request.return_value = make_response(body={"success": True, "cores": 0})
        with pytest.raises(LedgerClientError):
            client.cpu_cores()
