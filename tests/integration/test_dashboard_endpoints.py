"""Integration tests for the dashboard endpoint and app-level handlers."""
import pytest
from unittest.mock import AsyncMock, MagicMock

from invoicedesk.errors import ProviderError


@pytest.mark.asyncio
class TestDashboard:
    """Tests for GET /dashboard."""

    async def test_dashboard_empty(self, app_client, auth_headers):
        """Test a new user gets zeros everywhere."""
        response = await app_client.get("/dashboard", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_revenue"] == 0
        assert data["pending_amount"] == 0
        assert data["invoice_count"] == 0
        assert data["client_count"] == 0
        assert len(data["revenue_trend"]) == 7
        assert [share["status"] for share in data["status_distribution"]] == [
            "paid",
            "sent",
            "draft",
            "overdue",
        ]
        assert data["recent_activity"] == []
        assert data["today"] == {"minutes": 0, "earnings": 0}

    async def test_dashboard_figures(self, app_client, auth_headers):
        """Test figures reflect the user's records."""
        client_response = await app_client.post(
            "/clients", json={"name": "Acme", "hourly_rate": 60}, headers=auth_headers
        )
        client_id = client_response.json()["id"]
        for number, status, total, due in [
            ("INV-001", "paid", 300, "2099-01-01"),
            ("INV-002", "sent", 200, "2099-01-01"),
            ("INV-003", "sent", 50, "2000-01-01"),
            ("INV-004", "draft", 75, "2000-01-01"),
        ]:
            await app_client.post(
                "/invoices",
                json={
                    "client_id": client_id,
                    "invoice_number": number,
                    "status": status,
                    "issue_date": "2000-01-01",
                    "due_date": due,
                    "total": total,
                },
                headers=auth_headers,
            )
        await app_client.post(
            "/time-entries",
            json={
                "client_id": client_id,
                "project_name": "Website",
                "start_time": "2025-06-15T09:00:00Z",
                "duration": 30,
            },
            headers=auth_headers,
        )

        response = await app_client.get("/dashboard", headers=auth_headers)

        data = response.json()
        assert data["total_revenue"] == 300
        assert data["pending_amount"] == 250
        assert data["invoice_count"] == 4
        assert data["client_count"] == 1
        assert data["overdue_count"] == 1
        assert data["overdue_total"] == 50
        assert data["revenue_trend"][-1]["revenue"] == 300
        assert data["today"] == {"minutes": 30, "earnings": 30}

        paid_share = data["status_distribution"][0]
        assert paid_share == {"status": "paid", "count": 1, "percentage": 25}

        assert len(data["recent_activity"]) == 5
        invoice_items = [item for item in data["recent_activity"] if item["kind"] == "invoice"]
        assert {item["subtitle"] for item in invoice_items} == {"Acme"}

    async def test_dashboard_unauthorized(self, app_client):
        """Test the dashboard requires a token."""
        response = await app_client.get("/dashboard")

        assert response.status_code == 401

    async def test_dashboard_provider_failure(self, app_client, auth_headers):
        """Test a failing provider surfaces as a 500 without details."""
        from invoicedesk.database import database

        failing = MagicMock()
        failing.list = AsyncMock(side_effect=ProviderError("connection refused"))
        database.provider = failing

        response = await app_client.get("/dashboard", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


@pytest.mark.asyncio
class TestHealth:
    """Tests for the health endpoints."""

    async def test_root(self, app_client):
        """Test the root endpoint."""
        response = await app_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_health(self, app_client):
        """Test the health endpoint."""
        response = await app_client.get("/health")

        assert response.json() == {"status": "healthy"}
