"""
Order submission service.

Drives one order form submission through its lifecycle:

    IDLE -> VALIDATING -> (INVALID -> IDLE)
                       -> SUBMITTING -> (SUCCEEDED | FAILED -> IDLE)

Responsibilities, in order:
    1. Validate required fields and select values
    2. Resolve the current identity
    3. Reject if there is no session or the profile is not a client
    4. Price the order with the PricingEngine (the only pricing code path)
    5. Persist the order through the backend client
    6. Report the outcome as a SubmissionResult

ONE SUBMISSION IN FLIGHT PER FORM:
    Every rendered order form carries a form_id. InFlightRegistry refuses a
    second submit of the same form_id while the first is still SUBMITTING.
    There is no deduplication after completion and no retry.

Usage:
    order_service = OrderService(pricing_engine)
    result = order_service.submit(backend, request.form, form_id, access)
    if result.succeeded:
        flash(result.message, "success")
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional, Set

from core.backend_client import BackendClient
from core.exceptions import ConfigurationError, PersistenceError, ValidationError
from models.order import OrderRequest
from models.profile import CLIENT_ROLE
from models.submission import SubmissionResult, SubmissionState
from modules.pricing import PricingEngine
from services.access_guard import AccessDecision, AccessGuard
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

SUCCESS_MESSAGE = "Your order has been submitted successfully"
FAILURE_MESSAGE = "Failed to submit order. Please try again."
IN_FLIGHT_MESSAGE = "This order is already being submitted. Please wait."


class InFlightRegistry:
    """
    Thread-safe set of form ids whose submission is in progress.

    Thread Safety:
        - Uses threading.Lock for all operations
        - begin() is check-and-set under the lock
    """

    def __init__(self):
        """Initialize empty registry."""
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def begin(self, form_id: str) -> bool:
        """
        Mark a form as submitting.

        Args:
            form_id: Id of the rendered form

        Returns:
            True if the caller may proceed, False if already in flight
        """
        with self._lock:
            if form_id in self._in_flight:
                return False
            self._in_flight.add(form_id)
            return True

    def finish(self, form_id: str) -> None:
        """Release a form id (no-op if unknown)."""
        with self._lock:
            self._in_flight.discard(form_id)


class OrderService:
    """
    Validates, prices and persists order form submissions.

    Attributes:
        engine: PricingEngine used for every order
        registry: InFlightRegistry for the one-in-flight rule
    """

    def __init__(
        self,
        engine: PricingEngine,
        registry: Optional[InFlightRegistry] = None,
        required_role: str = CLIENT_ROLE,
    ):
        self.engine = engine
        self.registry = registry or InFlightRegistry()
        self.required_role = required_role
        logger.info("OrderService initialized")

    def submit(
        self,
        backend: BackendClient,
        form: Mapping[str, Any],
        form_id: str,
        access: Optional[AccessDecision] = None,
    ) -> SubmissionResult:
        """
        Submit one order form.

        Args:
            backend: Request-scoped backend client
            form: Submitted form data
            form_id: Id of the rendered form instance
            access: Access decision already made for this request, if any

        Returns:
            SubmissionResult in state INVALID, REJECTED, SUCCEEDED or FAILED

        Raises:
            AuthorizationError: If there is no session or the role is wrong
        """
        # STEP 1: Validate
        order_request = OrderRequest.from_form(form)
        logger.debug(f"[{form_id[:8]}] {SubmissionState.VALIDATING.value}")
        try:
            order_request.validate(self.engine.table)
        except ValidationError as e:
            logger.info(f"[{form_id[:8]}] Order form invalid: {sorted(e.field_errors)}")
            return SubmissionResult(SubmissionState.INVALID, field_errors=e.field_errors)

        # STEP 2-3: Resolve identity and check role
        if access is None:
            access = AccessGuard(self.required_role).check(backend)
        access.raise_for_denial(self.required_role)

        # STEP 4: Only one submission per form instance
        if not self.registry.begin(form_id):
            logger.warning(f"[{form_id[:8]}] Duplicate submit while in flight")
            return SubmissionResult(SubmissionState.REJECTED, message=IN_FLIGHT_MESSAGE)

        logger.debug(f"[{form_id[:8]}] {SubmissionState.SUBMITTING.value}")
        try:
            record = order_request.price(self.engine)
            backend.insert_order(record.to_payload())
        except (PersistenceError, ConfigurationError) as e:
            logger.error(f"[{form_id[:8]}] Error submitting order: {e}", exc_info=True)
            return SubmissionResult(SubmissionState.FAILED, message=FAILURE_MESSAGE)
        finally:
            self.registry.finish(form_id)

        logger.info(
            f"[{form_id[:8]}] Order submitted for user {access.session.user_id}: "
            f"{record.event_name} ({record.software_type}, {record.turnaround_time}) "
            f"price={record.price:.2f}"
        )
        return SubmissionResult(SubmissionState.SUCCEEDED, record=record, message=SUCCESS_MESSAGE)
