"""
Services layer for BoothOrderWeb.

This module contains the business logic services:
- AccessGuard: Session and role precondition for protected views
- OrderService: Order form validation, pricing and persistence
- ProfileService: Profile read and ordered update

Services receive a request-scoped BackendClient per call and hold no
per-user state. The only shared mutable state is the order form
InFlightRegistry.
"""

from .access_guard import AccessGuard, AccessDecision
from .order_service import OrderService, InFlightRegistry
from .profile_service import ProfileService

__all__ = [
    "AccessGuard",
    "AccessDecision",
    "OrderService",
    "InFlightRegistry",
    "ProfileService",
]
