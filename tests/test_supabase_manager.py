"""Unit tests for SupabaseManager startup checks and client creation."""

import pytest
from unittest.mock import MagicMock

from core.backend_client import BackendClient
from core.exceptions import BackendUnavailableError
from core.supabase_manager import SupabaseManager


class TestInitialize:

    @pytest.mark.parametrize("url, key", [
        ("", "anon-key"),
        ("https://project.supabase.co", ""),
        (None, None),
    ])
    def test_missing_settings_fail_fast(self, url, key):
        manager = SupabaseManager(url, key)

        with pytest.raises(BackendUnavailableError):
            manager.initialize()

        assert manager.is_initialized is False

    def test_url_needs_scheme(self):
        with pytest.raises(BackendUnavailableError):
            SupabaseManager("project.supabase.co", "anon-key").initialize()

    def test_valid_settings(self):
        manager = SupabaseManager(" https://project.supabase.co ", "anon-key")
        manager.initialize()

        assert manager.is_initialized is True
        assert manager.url == "https://project.supabase.co"


class TestOpenClient:

    def test_requires_initialize(self):
        manager = SupabaseManager("https://project.supabase.co", "anon-key")

        with pytest.raises(RuntimeError):
            manager.open_client()

    def test_new_client_per_call(self):
        factory = MagicMock(side_effect=lambda url, key, options: MagicMock())
        manager = SupabaseManager("https://project.supabase.co", "anon-key", client_factory=factory)
        manager.initialize()

        first = manager.open_client({"access_token": "a", "refresh_token": "r"})
        second = manager.open_client()

        assert isinstance(first, BackendClient)
        assert first is not second
        assert factory.call_count == 2

        url, key, options = factory.call_args[0]
        assert (url, key) == ("https://project.supabase.co", "anon-key")
        assert options.persist_session is False
        assert options.auto_refresh_token is False
