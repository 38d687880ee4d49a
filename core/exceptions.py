"""
Custom exceptions for BoothOrderWeb.

Exception Hierarchy:
    BoothOrderWebError (base)
    ├── BackendUnavailableError - Supabase not configured (startup failure)
    ├── ConfigurationError      - Pricing input outside the configured vocabulary
    ├── ValidationError         - Missing/invalid form fields (runtime, field messages)
    ├── AuthorizationError      - No session or wrong role (runtime, silent redirect)
    └── PersistenceError        - Backend call failed (runtime, generic message)

Usage:
    Startup errors (BackendUnavailableError) cause the app to fail fast.
    Runtime errors are caught by services and routes and turned into
    redirects or flash messages.
"""

from typing import Optional, Dict, Any


class BoothOrderWebError(Exception):
    """
    Base exception for all BoothOrderWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class BackendUnavailableError(BoothOrderWebError):
    """
    The hosted backend is not configured.

    Raised by SupabaseManager.initialize() when SUPABASE_URL or SUPABASE_KEY
    is missing or malformed. The app cannot serve any view without it.
    """

    def __init__(self, message: str = "Supabase backend is not configured"):
        details = {
            "resolution": "Set SUPABASE_URL and SUPABASE_KEY in .env"
        }
        super().__init__(message, details)


class ConfigurationError(BoothOrderWebError):
    """
    A pricing input or price table entry is outside the configured vocabulary.

    Raised in strict pricing mode instead of silently pricing the order at a
    discount, and when a price table file cannot be parsed.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# RUNTIME ERRORS - Application continues, but operation fails gracefully
# =============================================================================

class ValidationError(BoothOrderWebError):
    """
    One or more form fields are missing or invalid.

    field_errors maps a form field name to the message shown beside it.
    """

    def __init__(self, field_errors: Dict[str, str]):
        message = f"Invalid form input: {', '.join(sorted(field_errors))}"
        super().__init__(message, {"fields": sorted(field_errors)})
        self.field_errors = dict(field_errors)


class AuthorizationError(BoothOrderWebError):
    """
    The request has no session, or the session's profile lacks the required role.

    Never shown to the user; routes respond with a redirect.
    """

    def __init__(self, reason: str, required_role: Optional[str] = None):
        details = {"reason": reason}
        if required_role:
            details["required_role"] = required_role
        super().__init__(f"Access denied: {reason}", details)
        self.reason = reason
        self.required_role = required_role


class PersistenceError(BoothOrderWebError):
    """
    A call to the hosted backend failed.

    The user sees a generic message; the original error is chained as
    __cause__ and logged.
    """

    def __init__(self, operation: str, table: Optional[str] = None, reason: str = ""):
        target = f" on {table}" if table else ""
        message = f"Backend {operation}{target} failed"
        if reason:
            message = f"{message}: {reason}"
        details = {"operation": operation}
        if table:
            details["table"] = table
        super().__init__(message, details)
        self.operation = operation
        self.table = table
        self.reason = reason
