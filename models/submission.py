"""
Order submission state models.

These models describe where a form submission is in its lifecycle and what
the caller should show once it finishes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .order import OrderRecord


class SubmissionState(Enum):
    """
    State of an order form submission.

    Lifecycle:
        IDLE -> VALIDATING -> (INVALID -> IDLE)
                           -> SUBMITTING -> (SUCCEEDED | FAILED -> IDLE)
    """

    IDLE = "idle"
    """Form shown, nothing in flight."""

    VALIDATING = "validating"
    """Checking required fields."""

    INVALID = "invalid"
    """Field errors found; form shown again with messages."""

    SUBMITTING = "submitting"
    """Order is being priced and persisted."""

    SUCCEEDED = "succeeded"
    """Order persisted; caller navigates away."""

    FAILED = "failed"
    """Persisting failed; form shown again with a generic error."""

    REJECTED = "rejected"
    """Another submission of the same form is still in flight."""


@dataclass
class SubmissionResult:
    """Outcome of OrderService.submit()."""

    state: SubmissionState
    """Final state reached by this submission."""

    record: Optional[OrderRecord] = None
    """Priced order (set once pricing succeeded)."""

    field_errors: Dict[str, str] = field(default_factory=dict)
    """Per-field messages when state is INVALID."""

    message: str = ""
    """User-facing message for the flash notification."""

    @property
    def succeeded(self) -> bool:
        return self.state == SubmissionState.SUCCEEDED


@dataclass
class ProfileUpdateResult:
    """Outcome of ProfileService.update_profile()."""

    success: bool
    reason: str = ""
    email_change_requested: bool = False
