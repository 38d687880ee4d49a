"""
Access guard for protected views.

Resolves the request's session and, when a role is required, the linked
profile's role. The guard never renders anything: it returns a decision and
the route layer turns a denial into a silent redirect before any view code
runs.

Rules:
    1. No session -> denied, no profile fetch is attempted
    2. Role required -> exactly one profile fetch
    3. Fetch failure or missing profile -> denied (same as wrong role)
    4. profile.role != required_role -> denied

Usage:
    guard = AccessGuard(required_role="client")
    decision = guard.check(backend)
    if not decision.allowed:
        return redirect(url_for("main.index"))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.backend_client import BackendClient
from core.exceptions import AuthorizationError, PersistenceError
from models.profile import Profile
from models.session import AuthState, Session, UNAUTHENTICATED
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

REASON_NO_SESSION = "no_session"
REASON_PROFILE_UNAVAILABLE = "profile_unavailable"
REASON_WRONG_ROLE = "wrong_role"


@dataclass(frozen=True)
class AccessDecision:
    """Result of an access check."""

    auth: AuthState
    """Session if one was resolved, UNAUTHENTICATED otherwise."""

    profile: Optional[Profile] = None
    """Profile fetched for the role check (None if no role was required)."""

    denied_reason: Optional[str] = None
    """None when access is allowed."""

    @property
    def allowed(self) -> bool:
        return self.denied_reason is None

    @property
    def session(self) -> Optional[Session]:
        return self.auth if isinstance(self.auth, Session) else None

    def raise_for_denial(self, required_role: Optional[str] = None) -> None:
        """
        Raise AuthorizationError if access was denied.

        Raises:
            AuthorizationError: When denied_reason is set
        """
        if self.denied_reason:
            raise AuthorizationError(self.denied_reason, required_role)


class AccessGuard:
    """Session and role precondition for a protected view."""

    def __init__(self, required_role: Optional[str] = None):
        """
        Args:
            required_role: Role the profile must hold, or None for session-only
        """
        self.required_role = required_role

    def check(self, backend: BackendClient) -> AccessDecision:
        """
        Evaluate access for the current request.

        Args:
            backend: Request-scoped backend client

        Returns:
            AccessDecision (never raises for backend failures)
        """
        auth = backend.get_session()
        if not auth:
            logger.debug("Access denied: no session")
            return AccessDecision(UNAUTHENTICATED, denied_reason=REASON_NO_SESSION)

        if self.required_role is None:
            return AccessDecision(auth)

        try:
            profile = Profile.from_row(backend.fetch_profile(auth.user_id, "id, role"))
        except PersistenceError as e:
            logger.warning(f"Profile lookup failed during access check: {e}")
            return AccessDecision(auth, denied_reason=REASON_PROFILE_UNAVAILABLE)

        if profile is None:
            logger.info(f"Access denied: no profile for user {auth.user_id}")
            return AccessDecision(auth, denied_reason=REASON_PROFILE_UNAVAILABLE)

        if profile.role != self.required_role:
            logger.info(
                f"Access denied: user {auth.user_id} has role {profile.role!r}, "
                f"needs {self.required_role!r}"
            )
            return AccessDecision(auth, profile, REASON_WRONG_ROLE)

        return AccessDecision(auth, profile)
