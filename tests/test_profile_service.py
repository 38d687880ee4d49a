"""
Unit tests for the profile service.

The mock backend records calls in order, which is how the email change /
profile update ordering is checked.
"""

import pytest

from core.exceptions import PersistenceError
from models.session import UNAUTHENTICATED
from services.profile_service import ProfileService


@pytest.fixture
def profile_service():
    return ProfileService()


def _call_names(backend):
    return [c[0] for c in backend.mock_calls]


class TestGetProfile:

    def test_returns_profile(self, profile_service, backend, client_session):
        profile = profile_service.get_profile(backend, client_session)

        assert profile.id == "user-123"
        assert profile.name == "Casey Client"
        assert profile.is_client is True
        backend.fetch_profile.assert_called_once_with("user-123")

    def test_unauthenticated_returns_none(self, profile_service, backend):
        assert profile_service.get_profile(backend, UNAUTHENTICATED) is None
        backend.fetch_profile.assert_not_called()

    def test_read_failure_returns_none(self, profile_service, backend, client_session):
        backend.fetch_profile.side_effect = PersistenceError("select", "profiles")

        assert profile_service.get_profile(backend, client_session) is None


class TestUpdateProfile:

    def test_email_change_precedes_profile_update(self, profile_service, backend):
        result = profile_service.update_profile(
            backend, "user-123", "Casey", "new@example.com", current_email="casey@example.com"
        )

        assert result.success is True
        assert result.email_change_requested is True
        assert _call_names(backend) == ["update_user_email", "update_profile"]
        backend.update_user_email.assert_called_once_with("new@example.com")
        backend.update_profile.assert_called_once_with(
            "user-123", {"name": "Casey", "email": "new@example.com"}
        )

    def test_email_change_failure_stops_update(self, profile_service, backend):
        """If the identity provider refuses, the profiles row is never touched."""
        backend.update_user_email.side_effect = PersistenceError("update_user", reason="rate limited")

        result = profile_service.update_profile(
            backend, "user-123", "Casey", "new@example.com", current_email="casey@example.com"
        )

        assert result.success is False
        assert result.reason == "Could not change your email address."
        assert _call_names(backend) == ["update_user_email"]
        backend.update_profile.assert_not_called()

    def test_unchanged_email_skips_identity_provider(self, profile_service, backend):
        result = profile_service.update_profile(
            backend, "user-123", "Casey C.", "Casey@Example.com", current_email="casey@example.com"
        )

        assert result.success is True
        assert result.email_change_requested is False
        backend.update_user_email.assert_not_called()
        backend.update_profile.assert_called_once()

    def test_unknown_current_email_always_requests_change(self, profile_service, backend):
        profile_service.update_profile(backend, "user-123", "Casey", "casey@example.com")

        assert _call_names(backend) == ["update_user_email", "update_profile"]

    def test_profile_update_failure(self, profile_service, backend):
        backend.update_profile.side_effect = PersistenceError("update", "profiles")

        result = profile_service.update_profile(
            backend, "user-123", "Casey", "casey@example.com", current_email="casey@example.com"
        )

        assert result.success is False
        assert result.reason == "Failed to update profile."

    def test_invalid_email_rejected_without_calls(self, profile_service, backend):
        result = profile_service.update_profile(backend, "user-123", "Casey", "not-an-email")

        assert result.success is False
        assert backend.mock_calls == []

    def test_name_sanitised(self, profile_service, backend):
        profile_service.update_profile(
            backend, "user-123", "<i>Casey</i>", "casey@example.com", current_email="casey@example.com"
        )

        fields = backend.update_profile.call_args[0][1]
        assert fields["name"] == "Casey"

    def test_ampersand_not_escaped(self, profile_service, backend):
        profile_service.update_profile(
            backend, "user-123", "Tom & Jerry <3", "tom&jerry@example.com",
            current_email="casey@example.com",
        )

        backend.update_user_email.assert_called_once_with("tom&jerry@example.com")
        fields = backend.update_profile.call_args[0][1]
        assert fields["name"] == "Tom & Jerry <3"
