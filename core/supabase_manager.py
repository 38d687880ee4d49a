"""
Supabase connection settings and per-request client creation.

The manager validates the backend configuration once at application startup
and then hands out a fresh BackendClient for every request. Clients are never
shared between requests: the supabase auth client keeps the signed-in session
in memory, so sharing one would leak one user's identity into another's
request.

FAIL FAST BEHAVIOR:
    - Missing SUPABASE_URL or SUPABASE_KEY: raises BackendUnavailableError
    - URL without an http(s) scheme: raises BackendUnavailableError

Usage:
    # At application startup
    manager = SupabaseManager(url, key)
    manager.initialize()

    # Per request
    backend = manager.open_client(flask_session.get("auth"))
    state = backend.get_session()
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from supabase import Client, create_client
from supabase.client import ClientOptions

from .backend_client import BackendClient
from .exceptions import BackendUnavailableError


class SupabaseManager:
    """
    Owns the Supabase project settings.

    Attributes:
        url: Supabase project URL
        is_initialized: True once the settings have been validated
    """

    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        logger: Optional[logging.Logger] = None,
        client_factory: Optional[Callable[[str, str, ClientOptions], Client]] = None,
    ):
        """
        Initialize the manager.

        Args:
            url: Supabase project URL
            key: Supabase anon (public) API key
            logger: Logger instance (optional, creates default if not provided)
            client_factory: Callable used to build supabase clients
                (defaults to supabase.create_client)

        Note:
            This does NOT validate anything - call initialize() to do that.
        """
        self._url = (url or "").strip()
        self._key = (key or "").strip()
        self._logger = logger or logging.getLogger("booth_order_web.core.supabase_manager")
        self._client_factory = client_factory or create_client
        self._is_initialized = False

    @property
    def url(self) -> str:
        """Supabase project URL."""
        return self._url

    @property
    def is_initialized(self) -> bool:
        """True if the configuration has been validated."""
        return self._is_initialized

    def initialize(self) -> None:
        """
        Validate the backend configuration.

        Raises:
            BackendUnavailableError: If URL or key is missing or malformed
        """
        if self._is_initialized:
            return

        if not self._url or not self._key:
            self._logger.critical("SUPABASE_URL and SUPABASE_KEY must both be set")
            raise BackendUnavailableError()

        if not self._url.startswith(("http://", "https://")):
            self._logger.critical(f"SUPABASE_URL is not an http(s) URL: {self._url}")
            raise BackendUnavailableError(f"Invalid SUPABASE_URL: {self._url}")

        self._is_initialized = True
        self._logger.info(f"Supabase backend configured: {self._url}")

    def open_client(self, tokens: Optional[Dict[str, str]] = None) -> BackendClient:
        """
        Create a backend client for a single request.

        Args:
            tokens: Access/refresh token pair from the Flask session, if any

        Returns:
            BackendClient bound to a new supabase client

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if not self._is_initialized:
            raise RuntimeError("SupabaseManager not initialized - call initialize() first")

        options = ClientOptions(auto_refresh_token=False, persist_session=False)
        client = self._client_factory(self._url, self._key, options)
        return BackendClient(client, tokens=tokens)
