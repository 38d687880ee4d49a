"""
Request-scoped backend access and view guards.

get_backend() creates one BackendClient per request (cached on flask.g)
from the tokens stored in the cookie session. The guard decorators run the
AccessGuard before the view body; a denied request is redirected to the
landing page without rendering anything and without a message.
"""

from functools import wraps
from typing import Optional

from flask import current_app, g, redirect, session, url_for

from core.backend_client import BackendClient
from models.profile import CLIENT_ROLE
from services.access_guard import AccessGuard, REASON_NO_SESSION
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Flask session key holding the access/refresh token pair
AUTH_SESSION_KEY = "auth"


def get_backend() -> BackendClient:
    """Backend client for the current request."""
    if "backend" not in g:
        manager = current_app.config["SUPABASE_MANAGER"]
        g.backend = manager.open_client(session.get(AUTH_SESSION_KEY))
    return g.backend


def store_tokens(tokens: Optional[dict]) -> None:
    """Save (or clear, with None) the token pair in the cookie session."""
    if tokens:
        session[AUTH_SESSION_KEY] = tokens
    else:
        session.pop(AUTH_SESSION_KEY, None)
    session.modified = True


def guarded(required_role: Optional[str] = None):
    """
    Protect a view with the access guard.

    On success the AccessDecision is available as g.access.

    Args:
        required_role: Role the profile must hold, or None for session-only
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = AccessGuard(required_role).check(get_backend())

            if not decision.allowed:
                logger.info(f"Redirecting {view.__name__}: {decision.denied_reason}")
                if decision.denied_reason == REASON_NO_SESSION:
                    store_tokens(None)
                return redirect(url_for("main.index"))

            # Tokens may have been refreshed while restoring the session
            if decision.session.tokens() != session.get(AUTH_SESSION_KEY):
                store_tokens(decision.session.tokens())

            g.access = decision
            return view(*args, **kwargs)

        return wrapper

    return decorator


login_required = guarded()
client_required = guarded(CLIENT_ROLE)
