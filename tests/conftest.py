"""Shared fixtures: a mock backend collaborator and a signed-in client session."""

import pytest
from unittest.mock import MagicMock

from core.backend_client import BackendClient
from models.session import Session


@pytest.fixture
def client_session():
    """Session of a signed-in user whose profile role is 'client'."""
    return Session(
        user_id="user-123",
        email="casey@example.com",
        access_token="access-token",
        refresh_token="refresh-token",
    )


@pytest.fixture
def client_profile_row():
    """Profiles row for client_session."""
    return {
        "id": "user-123",
        "name": "Casey Client",
        "email": "casey@example.com",
        "role": "client",
    }


@pytest.fixture
def backend(client_session, client_profile_row):
    """
    Mock backend collaborator.

    All calls are recorded in order on backend.mock_calls.
    """
    mock_backend = MagicMock(spec=BackendClient)
    mock_backend.get_session.return_value = client_session
    mock_backend.fetch_profile.return_value = dict(client_profile_row)
    mock_backend.insert_order.return_value = {"id": 1}
    mock_backend.list_orders.return_value = []
    return mock_backend


@pytest.fixture
def order_form():
    """A complete order form for the darkroom booth with the file add-on."""
    return {
        "event_name": "Smith Wedding",
        "software_type": "darkroom_booth_3",
        "dimensions": "4x6",
        "turnaround_time": "1d",
        "has_darkroom_file": "1",
    }
