"""
Unit tests for the order submission service.

Tests the full submission flow against a mock backend collaborator.
"""

import threading

import pytest

from core.exceptions import AuthorizationError, PersistenceError
from models.session import UNAUTHENTICATED
from models.submission import SubmissionState
from modules.pricing import PricingEngine
from services.order_service import (
    FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
    InFlightRegistry,
    OrderService,
)


# Fixtures

@pytest.fixture
def order_service():
    """Order service with the default strict pricing engine."""
    return OrderService(PricingEngine())


# Tests for the submission flow

class TestSubmit:
    """Happy path and each failure state."""

    def test_booth_with_file_persists_price_35(self, order_service, backend, order_form):
        """1d tier (25) plus darkroom file (10)."""
        result = order_service.submit(backend, order_form, "form-0001")

        assert result.state == SubmissionState.SUCCEEDED
        assert result.succeeded is True
        assert result.message == SUCCESS_MESSAGE
        assert result.record.price == 35.0
        backend.insert_order.assert_called_once_with({
            "event_name": "Smith Wedding",
            "software_type": "darkroom_booth_3",
            "dimensions": "4x6",
            "turnaround_time": "1d",
            "price": 35.0,
        })

    def test_ampersand_and_angle_bracket_stored_as_typed(self, order_service, backend, order_form):
        order_form["event_name"] = "Smith & Jones <3"
        order_form["dimensions"] = "4x6 <b>matte</b>"

        order_service.submit(backend, order_form, "form-0008")

        payload = backend.insert_order.call_args[0][0]
        assert payload["event_name"] == "Smith & Jones <3"
        assert payload["dimensions"] == "4x6 matte"

    def test_invalid_form_not_persisted(self, order_service, backend, order_form):
        order_form["dimensions"] = ""

        result = order_service.submit(backend, order_form, "form-0002")

        assert result.state == SubmissionState.INVALID
        assert result.field_errors == {"dimensions": "Dimensions are required"}
        backend.insert_order.assert_not_called()

    def test_validation_runs_before_identity(self, order_service, backend):
        """An empty form is reported without any backend call."""
        result = order_service.submit(backend, {}, "form-0003")

        assert result.state == SubmissionState.INVALID
        assert backend.mock_calls == []

    def test_no_session_rejected(self, order_service, backend, order_form):
        backend.get_session.return_value = UNAUTHENTICATED

        with pytest.raises(AuthorizationError):
            order_service.submit(backend, order_form, "form-0004")

        backend.fetch_profile.assert_not_called()
        backend.insert_order.assert_not_called()

    def test_non_client_rejected(self, order_service, backend, order_form, client_profile_row):
        backend.fetch_profile.return_value = dict(client_profile_row, role="staff")

        with pytest.raises(AuthorizationError) as exc_info:
            order_service.submit(backend, order_form, "form-0005")

        assert exc_info.value.required_role == "client"
        backend.insert_order.assert_not_called()

    def test_insert_failure_reports_generic_message(self, order_service, backend, order_form):
        backend.insert_order.side_effect = PersistenceError("insert", "orders", "permission denied")

        result = order_service.submit(backend, order_form, "form-0006")

        assert result.state == SubmissionState.FAILED
        assert result.message == FAILURE_MESSAGE
        assert "permission denied" not in result.message
        assert order_service.registry.begin("form-0006") is True

    def test_given_access_decision_reused(self, order_service, backend, order_form):
        """A decision made by the route guard is not re-evaluated."""
        from services.access_guard import AccessGuard

        access = AccessGuard("client").check(backend)
        backend.reset_mock()

        result = order_service.submit(backend, order_form, "form-0007", access)

        assert result.succeeded
        backend.get_session.assert_not_called()
        backend.fetch_profile.assert_not_called()


# Tests for the one-in-flight rule

class TestInFlight:
    """Only one submission per form instance at a time."""

    def test_registry_begin_finish(self):
        registry = InFlightRegistry()

        assert registry.begin("a") is True
        assert registry.begin("a") is False
        assert registry.begin("b") is True

        registry.finish("a")
        assert registry.begin("a") is True

    def test_finish_unknown_is_noop(self):
        InFlightRegistry().finish("never-started")

    def test_second_submit_rejected_while_first_in_flight(self, order_service, backend, order_form):
        started = threading.Event()
        release = threading.Event()
        results = []

        def slow_insert(payload):
            started.set()
            release.wait(5)
            return {"id": 1}

        backend.insert_order.side_effect = slow_insert

        worker = threading.Thread(
            target=lambda: results.append(order_service.submit(backend, order_form, "form-dup"))
        )
        worker.start()
        assert started.wait(5)

        second = order_service.submit(backend, order_form, "form-dup")
        release.set()
        worker.join(5)

        assert second.state == SubmissionState.REJECTED
        assert results[0].state == SubmissionState.SUCCEEDED
        assert backend.insert_order.call_count == 1

    def test_form_released_after_success(self, order_service, backend, order_form):
        order_service.submit(backend, order_form, "form-again")
        result = order_service.submit(backend, order_form, "form-again")

        assert result.succeeded
        assert backend.insert_order.call_count == 2
