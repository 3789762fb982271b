"""Tests for ActivityService and request context."""

from unittest.mock import patch

import pytest
from django.test import RequestFactory

from apps.core.middleware import RequestContextMiddleware, get_client_ip, get_current_request
from apps.core.services import ActivityService
from apps.registrations.variants import CLUB


class TestActivityService:
    """Tests for ActivityService."""

    @patch("apps.core.services.audit_logger")
    def test_log_emits_entry(self, mock_logger):
        """Test that log writes to the audit logger and returns the entry."""
        entry = ActivityService.log("approved", "Club", "C1")

        assert entry["action"] == "approved"
        assert entry["resource_type"] == "Club"
        assert entry["resource_id"] == "C1"
        assert entry["changes"] == {}
        mock_logger.info.assert_called_once()

    @patch("apps.core.services.audit_logger")
    def test_log_create_uses_wire_id(self, mock_logger):
        entry = ActivityService.log_create(CLUB, {"clubId": "C1718000000000", "clubName": "Alpha"})

        assert entry["action"] == "created"
        assert entry["resource_id"] == "C1718000000000"

    @patch("apps.core.services.audit_logger")
    def test_log_update_never_records_password(self, mock_logger):
        """Test that the password is stripped from recorded changes."""
        entry = ActivityService.log_update(CLUB, "C1", {"email": "new@example.com", "password": "secret"})

        assert entry["changes"] == {"email": "new@example.com"}

    @patch("apps.core.services.audit_logger")
    def test_log_includes_client_ip_during_request(self, mock_logger):
        """Test that the IP of the request being served is attached."""
        request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1")
        middleware = RequestContextMiddleware(
            lambda r: ActivityService.log_transition(CLUB, "C1", "deleted")
        )

        entry = middleware(request)

        assert entry["ip_address"] == "203.0.113.5"


class TestRequestContext:
    """Tests for the thread-local request context."""

    def test_no_request_outside_middleware(self):
        assert get_current_request() is None
        assert get_client_ip() is None

    def test_request_visible_only_while_served(self):
        request = RequestFactory().get("/", REMOTE_ADDR="198.51.100.7")
        seen = {}

        def view(r):
            seen["request"] = get_current_request()
            seen["ip"] = get_client_ip()

        RequestContextMiddleware(view)(request)

        assert seen == {"request": request, "ip": "198.51.100.7"}
        assert get_current_request() is None

    def test_context_cleared_when_view_raises(self):
        def view(r):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            RequestContextMiddleware(view)(RequestFactory().get("/"))

        assert get_current_request() is None

    def test_explicit_request_and_empty_forwarding_header(self):
        request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR=" ", REMOTE_ADDR="192.0.2.1")

        assert get_client_ip(request) == "192.0.2.1"
