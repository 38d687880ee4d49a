"""
Data models for BoothOrderWeb.

This module contains dataclasses for:
- OrderRequest / OrderRecord: A client's order before and after pricing
- Profile: A profiles row
- Session / UNAUTHENTICATED: Explicit auth context for guarded operations
- SubmissionState / SubmissionResult: Order submission lifecycle
"""

from .order import OrderRequest, OrderRecord
from .profile import Profile, CLIENT_ROLE
from .session import Session, Unauthenticated, UNAUTHENTICATED, AuthState
from .submission import SubmissionState, SubmissionResult, ProfileUpdateResult

__all__ = [
    # Order models
    "OrderRequest",
    "OrderRecord",
    # Profile models
    "Profile",
    "CLIENT_ROLE",
    # Auth context
    "Session",
    "Unauthenticated",
    "UNAUTHENTICATED",
    "AuthState",
    # Submission models
    "SubmissionState",
    "SubmissionResult",
    "ProfileUpdateResult",
]
