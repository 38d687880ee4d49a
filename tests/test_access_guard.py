"""
Unit tests for the access guard.

The backend collaborator is a MagicMock, so every profile fetch is counted.
"""

import pytest

from core.exceptions import AuthorizationError, PersistenceError
from models.session import UNAUTHENTICATED
from services.access_guard import (
    AccessGuard,
    REASON_NO_SESSION,
    REASON_PROFILE_UNAVAILABLE,
    REASON_WRONG_ROLE,
)


class TestClientRoleGuard:
    """Guard for order submission and the client dashboard."""

    def test_no_session_skips_profile_fetch(self, backend):
        """Without a session the guard denies before touching profiles."""
        backend.get_session.return_value = UNAUTHENTICATED

        decision = AccessGuard("client").check(backend)

        assert decision.allowed is False
        assert decision.denied_reason == REASON_NO_SESSION
        assert decision.session is None
        backend.fetch_profile.assert_not_called()

    def test_wrong_role_after_one_fetch(self, backend, client_profile_row):
        """A non-client profile is denied after exactly one profile fetch."""
        backend.fetch_profile.return_value = dict(client_profile_row, role="admin")

        decision = AccessGuard("client").check(backend)

        assert decision.allowed is False
        assert decision.denied_reason == REASON_WRONG_ROLE
        assert backend.fetch_profile.call_count == 1

    def test_client_allowed(self, backend, client_session):
        decision = AccessGuard("client").check(backend)

        assert decision.allowed is True
        assert decision.session == client_session
        assert decision.profile.role == "client"
        backend.fetch_profile.assert_called_once_with("user-123", "id, role")

    def test_fetch_failure_denies(self, backend):
        """A failed profile read is treated like a missing profile."""
        backend.fetch_profile.side_effect = PersistenceError("select", "profiles", "timeout")

        decision = AccessGuard("client").check(backend)

        assert decision.allowed is False
        assert decision.denied_reason == REASON_PROFILE_UNAVAILABLE

    def test_missing_profile_denies(self, backend):
        backend.fetch_profile.return_value = None

        decision = AccessGuard("client").check(backend)

        assert decision.denied_reason == REASON_PROFILE_UNAVAILABLE

    def test_raise_for_denial(self, backend):
        backend.get_session.return_value = UNAUTHENTICATED
        decision = AccessGuard("client").check(backend)

        with pytest.raises(AuthorizationError) as exc_info:
            decision.raise_for_denial("client")

        assert exc_info.value.reason == REASON_NO_SESSION
        assert exc_info.value.required_role == "client"


class TestSessionOnlyGuard:
    """Guard for the profile page (no role required)."""

    def test_session_is_enough(self, backend):
        decision = AccessGuard().check(backend)

        assert decision.allowed is True
        assert decision.profile is None
        backend.fetch_profile.assert_not_called()

    def test_no_session_denied(self, backend):
        backend.get_session.return_value = UNAUTHENTICATED

        assert AccessGuard().check(backend).allowed is False
