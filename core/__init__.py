"""
Core module for BoothOrderWeb.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- supabase_manager: Backend settings and per-request client creation
- backend_client: Request-scoped wrapper for profile/order/auth calls
"""

from .exceptions import (
    BoothOrderWebError,
    BackendUnavailableError,
    ConfigurationError,
    ValidationError,
    AuthorizationError,
    PersistenceError,
)
from .backend_client import BackendClient
from .supabase_manager import SupabaseManager

__all__ = [
    "BoothOrderWebError",
    "BackendUnavailableError",
    "ConfigurationError",
    "ValidationError",
    "AuthorizationError",
    "PersistenceError",
    "BackendClient",
    "SupabaseManager",
]
