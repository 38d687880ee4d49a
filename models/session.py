"""
Authentication context models.

A request is either backed by a Session restored from the tokens held in the
Flask cookie session, or it is UNAUTHENTICATED. Guarded operations receive one
of the two explicitly instead of reading an ambient "current user".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Session:
    """An authenticated backend session."""

    user_id: str
    """Identity id; also the primary key of the user's profiles row."""

    email: str
    """Email address known to the identity provider."""

    access_token: str
    refresh_token: str

    def tokens(self) -> Dict[str, str]:
        """Token pair for storage in the Flask session."""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
        }

    @classmethod
    def from_auth(cls, auth_session: Any) -> "Session":
        """
        Build from a supabase auth session object.

        Args:
            auth_session: Session returned by the supabase auth client

        Returns:
            Session instance
        """
        user = auth_session.user
        return cls(
            user_id=str(user.id),
            email=user.email or "",
            access_token=auth_session.access_token,
            refresh_token=auth_session.refresh_token,
        )


class Unauthenticated:
    """Marker for a request without a usable session."""

    _instance: Optional["Unauthenticated"] = None

    def __new__(cls) -> "Unauthenticated":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAUTHENTICATED"


UNAUTHENTICATED = Unauthenticated()

AuthState = Union[Session, Unauthenticated]
