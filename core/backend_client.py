"""
Request-scoped wrapper around the supabase client.

This is the only module that talks to the hosted backend. Every call is a
direct round trip; nothing is cached. Failures from the supabase libraries
(auth errors, PostgREST errors, transport errors) are caught here and
re-raised as PersistenceError, chained to the original exception so the
cause stays in the logs.

Collaborator contract:
    get_session()                  -> Session | UNAUTHENTICATED
    update_user_email(email)       -> auth.update_user
    fetch_profile(id, columns)     -> profiles select by id
    update_profile(id, fields)     -> profiles update by id
    insert_order(fields)           -> orders insert
    sign_in / sign_out / list_orders

Usage:
    backend = BackendClient(supabase_client, tokens=session.get("auth"))
    state = backend.get_session()
    if state:
        profile_row = backend.fetch_profile(state.user_id, "role")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from supabase import AuthError, PostgrestAPIError

from models.session import AuthState, Session, UNAUTHENTICATED
from .exceptions import AuthorizationError, PersistenceError


# Errors raised by the supabase client stack for a failed call
BACKEND_ERRORS = (AuthError, PostgrestAPIError, httpx.HTTPError)

PROFILES_TABLE = "profiles"
ORDERS_TABLE = "orders"


class BackendClient:
    """
    Supabase collaborator for one request.

    The supabase client holds auth state in memory, so one instance must
    never serve two users. SupabaseManager.open_client() creates a fresh
    one per request.
    """

    def __init__(
        self,
        client: Any,
        tokens: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            client: supabase Client instance
            tokens: Access/refresh token pair restored from the cookie session
            logger: Logger instance (optional)
        """
        if client is None:
            raise ValueError("client is required")

        self._client = client
        self._tokens = dict(tokens) if tokens else None
        self._logger = logger or logging.getLogger("booth_order_web.core.backend_client")
        self._session: Optional[AuthState] = None

    # =========================================================================
    # AUTH
    # =========================================================================

    def get_session(self) -> AuthState:
        """
        Resolve the session for this request.

        Restores the stored token pair into the auth client. Missing tokens
        resolve to UNAUTHENTICATED without a network call; rejected tokens
        resolve to UNAUTHENTICATED as well. The result is memoised for the
        lifetime of this client.

        Returns:
            Session or UNAUTHENTICATED
        """
        if self._session is not None:
            return self._session

        if not self._tokens or not self._tokens.get("access_token"):
            self._session = UNAUTHENTICATED
            return self._session

        try:
            response = self._client.auth.set_session(
                self._tokens["access_token"],
                self._tokens.get("refresh_token", ""),
            )
        except BACKEND_ERRORS as e:
            self._logger.info(f"Stored session rejected by backend: {e}")
            self._session = UNAUTHENTICATED
            return self._session

        auth_session = getattr(response, "session", None)
        if auth_session is None:
            self._session = UNAUTHENTICATED
        else:
            self._session = Session.from_auth(auth_session)
        return self._session

    def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Returns:
            The new Session

        Raises:
            AuthorizationError: If the credentials are rejected
        """
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except BACKEND_ERRORS as e:
            self._logger.info(f"Sign-in rejected for {email}: {e}")
            raise AuthorizationError("invalid credentials") from e

        if getattr(response, "session", None) is None:
            raise AuthorizationError("invalid credentials")

        self._session = Session.from_auth(response.session)
        return self._session

    def sign_out(self) -> None:
        """Revoke the current session; failures are logged only."""
        if not self.get_session():
            return
        try:
            self._client.auth.sign_out()
        except BACKEND_ERRORS as e:
            self._logger.warning(f"Sign-out failed: {e}")
        self._session = UNAUTHENTICATED

    def update_user_email(self, email: str) -> None:
        """
        Request an email change from the identity provider.

        Raises:
            PersistenceError: If the identity provider rejects the request
        """
        try:
            self._client.auth.update_user({"email": email})
        except BACKEND_ERRORS as e:
            raise PersistenceError("update_user", reason=_describe(e)) from e

    # =========================================================================
    # TABLES
    # =========================================================================

    def fetch_profile(self, profile_id: str, columns: str = "*") -> Optional[Dict[str, Any]]:
        """
        Read one profiles row.

        Args:
            profile_id: Profile primary key (equals the session user id)
            columns: PostgREST column list

        Returns:
            Row dictionary, or None if no row exists

        Raises:
            PersistenceError: If the query fails
        """
        try:
            response = (
                self._client.table(PROFILES_TABLE)
                .select(columns)
                .eq("id", profile_id)
                .limit(1)
                .execute()
            )
        except BACKEND_ERRORS as e:
            raise PersistenceError("select", PROFILES_TABLE, _describe(e)) from e

        rows = response.data or []
        return rows[0] if rows else None

    def update_profile(self, profile_id: str, fields: Dict[str, Any]) -> None:
        """
        Update one profiles row.

        Raises:
            PersistenceError: If the update fails
        """
        try:
            (
                self._client.table(PROFILES_TABLE)
                .update(fields)
                .eq("id", profile_id)
                .execute()
            )
        except BACKEND_ERRORS as e:
            raise PersistenceError("update", PROFILES_TABLE, _describe(e)) from e

    def insert_order(self, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Insert one orders row.

        Returns:
            The inserted row as returned by the backend, if any

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            response = self._client.table(ORDERS_TABLE).insert(fields).execute()
        except BACKEND_ERRORS as e:
            raise PersistenceError("insert", ORDERS_TABLE, _describe(e)) from e

        rows = response.data or []
        return rows[0] if rows else None

    def list_orders(self, limit: int = 50) -> List[Dict[str, Any]]:
        """
        Read the orders visible to this session, newest first.

        Row ownership is enforced by the backend's row level security.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            response = (
                self._client.table(ORDERS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except BACKEND_ERRORS as e:
            raise PersistenceError("select", ORDERS_TABLE, _describe(e)) from e

        return list(response.data or [])


def _describe(error: Exception) -> str:
    """Short message for an error raised by the supabase stack."""
    return getattr(error, "message", None) or str(error) or error.__class__.__name__
