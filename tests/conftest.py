"""Pytest configuration and fixtures."""
import itertools
import os
from datetime import date, datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from invoicedesk.main import app
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice
from invoicedesk.models.time_entry import TimeEntry
from invoicedesk.providers.memory import InMemoryProvider
from invoicedesk.utils.auth import create_access_token


# Reference moment used by the aggregation tests
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client backed by a fresh in-memory provider.

    This fixture:
    - Swaps the app's provider for an empty InMemoryProvider
    - Yields an async HTTP client for testing
    - Restores the original provider afterwards
    """
    from invoicedesk.database import database

    original_provider = database.provider
    database.provider = InMemoryProvider()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    database.provider = original_provider


@pytest.fixture
def auth_headers():
    """Bearer headers for user123."""
    token = create_access_token(user_id="user123")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers():
    """Bearer headers for a second user."""
    token = create_access_token(user_id="user456")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def provider():
    """Empty in-memory provider."""
    return InMemoryProvider()


@pytest.fixture
def make_client():
    """Factory for Client records."""
    counter = itertools.count(1)

    def _make(**overrides) -> Client:
        n = next(counter)
        data = {
            "_id": f"client{n}",
            "user_id": "user123",
            "name": f"Client {n}",
            "hourly_rate": 50.0,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return Client.model_validate(data)

    return _make


@pytest.fixture
def make_invoice():
    """Factory for Invoice records."""
    counter = itertools.count(1)

    def _make(**overrides) -> Invoice:
        n = next(counter)
        data = {
            "_id": f"inv{n}",
            "user_id": "user123",
            "client_id": "client1",
            "invoice_number": f"INV-{n:03d}",
            "status": "draft",
            "issue_date": date(2025, 6, 1),
            "due_date": date(2025, 6, 30),
            "subtotal": 100.0,
            "total": 100.0,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return Invoice.model_validate(data)

    return _make


@pytest.fixture
def make_entry():
    """Factory for TimeEntry records."""
    counter = itertools.count(1)

    def _make(**overrides) -> TimeEntry:
        n = next(counter)
        data = {
            "_id": f"entry{n}",
            "user_id": "user123",
            "project_name": f"Project {n}",
            "start_time": NOW,
            "duration": 60,
            "hourly_rate": 50.0,
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return TimeEntry.model_validate(data)

    return _make


@pytest.fixture
def now():
    """Fixed reference time: 2025-06-15 12:00 UTC."""
    return NOW
