"""
Profile read/update service.

Update ordering:
    1. If the email changes, ask the identity provider to change it
    2. Only if step 1 succeeded, update the profiles row

A failure at any step stops the update; nothing after it is issued. The
caller re-reads the profile after a successful update rather than trusting
a local copy.
"""

from __future__ import annotations

from typing import Optional

from core.backend_client import BackendClient
from core.exceptions import PersistenceError
from modules.sanitize import sanitize_text
from models.profile import Profile
from models.session import AuthState
from models.submission import ProfileUpdateResult
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

MAX_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 254


class ProfileService:
    """Reads and updates the signed-in user's profile."""

    def get_profile(self, backend: BackendClient, auth: AuthState) -> Optional[Profile]:
        """
        Fetch the profile linked to a session.

        Args:
            backend: Request-scoped backend client
            auth: Session or UNAUTHENTICATED

        Returns:
            Profile, or None if unauthenticated, missing, or the read failed
        """
        if not auth:
            return None

        try:
            return Profile.from_row(backend.fetch_profile(auth.user_id))
        except PersistenceError as e:
            logger.error(f"Failed to load profile for {auth.user_id}: {e}", exc_info=True)
            return None

    def update_profile(
        self,
        backend: BackendClient,
        profile_id: str,
        name: str,
        email: str,
        current_email: Optional[str] = None,
    ) -> ProfileUpdateResult:
        """
        Update name and email.

        Args:
            backend: Request-scoped backend client
            profile_id: Id of the profiles row to update
            name: New display name
            email: New email address
            current_email: Email on record; None forces the email change request

        Returns:
            ProfileUpdateResult with a user-facing reason on failure
        """
        name = sanitize_text(name, MAX_NAME_LENGTH)
        email = sanitize_text(email, MAX_EMAIL_LENGTH)

        if not email or "@" not in email:
            return ProfileUpdateResult(False, "Please enter a valid email address.")

        email_changed = current_email is None or email.lower() != current_email.lower()

        if email_changed:
            try:
                backend.update_user_email(email)
            except PersistenceError as e:
                logger.error(f"Email change rejected for profile {profile_id}: {e}", exc_info=True)
                return ProfileUpdateResult(False, "Could not change your email address.")

        try:
            backend.update_profile(profile_id, {"name": name, "email": email})
        except PersistenceError as e:
            logger.error(f"Failed to update profile {profile_id}: {e}", exc_info=True)
            return ProfileUpdateResult(False, "Failed to update profile.", email_changed)

        logger.info(f"Profile {profile_id} updated (email change requested: {email_changed})")
        return ProfileUpdateResult(True, email_change_requested=email_changed)
