"""Integration tests for time entry endpoints."""
import pytest


@pytest.mark.asyncio
class TestTimeEntryCreate:
    """Tests for creating time entries."""

    async def test_create_entry_inherits_client_rate(self, app_client, auth_headers):
        """Test the hourly rate defaults to the client's."""
        client_response = await app_client.post(
            "/clients", json={"name": "Acme", "hourly_rate": 80}, headers=auth_headers
        )
        client_id = client_response.json()["id"]

        response = await app_client.post(
            "/time-entries",
            json={
                "client_id": client_id,
                "project_name": "Website",
                "start_time": "2025-06-15T09:00:00Z",
                "end_time": "2025-06-15T10:30:00Z",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["hourly_rate"] == 80
        assert data["duration"] == 90
        assert data["is_billable"] is True
        assert data["is_invoiced"] is False

    async def test_create_entry_explicit_rate(self, app_client, auth_headers):
        """Test a given rate wins over the client's."""
        client_response = await app_client.post(
            "/clients", json={"name": "Acme", "hourly_rate": 80}, headers=auth_headers
        )

        response = await app_client.post(
            "/time-entries",
            json={
                "client_id": client_response.json()["id"],
                "project_name": "Website",
                "start_time": "2025-06-15T09:00:00Z",
                "duration": 30,
                "hourly_rate": 0,
            },
            headers=auth_headers,
        )

        assert response.json()["hourly_rate"] == 0

    async def test_create_entry_without_client(self, app_client, auth_headers):
        """Test entries without a client get rate 0."""
        response = await app_client.post(
            "/time-entries",
            json={"project_name": "Admin", "start_time": "2025-06-15T09:00:00Z"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["client_id"] is None
        assert data["hourly_rate"] == 0
        assert data["duration"] == 0

    async def test_create_entry_missing_project(self, app_client, auth_headers):
        """Test project_name is required."""
        response = await app_client.post(
            "/time-entries",
            json={"start_time": "2025-06-15T09:00:00Z"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_create_entry_unauthorized(self, app_client):
        """Test creating an entry without a token."""
        response = await app_client.post(
            "/time-entries",
            json={"project_name": "Admin", "start_time": "2025-06-15T09:00:00Z"},
        )

        assert response.status_code == 401


@pytest.mark.asyncio
class TestTimeEntryList:
    """Tests for listing time entries."""

    async def test_list_entries_filters(self, app_client, auth_headers):
        """Test client and date filters."""
        for project, client_id, start in [
            ("Early", "c1", "2025-06-10T09:00:00Z"),
            ("Late", "c1", "2025-06-20T09:00:00Z"),
            ("Other", "c2", "2025-06-20T09:00:00Z"),
        ]:
            await app_client.post(
                "/time-entries",
                json={"client_id": client_id, "project_name": project, "start_time": start},
                headers=auth_headers,
            )

        by_client = await app_client.get(
            "/time-entries", params={"client_id": "c1"}, headers=auth_headers
        )
        in_range = await app_client.get(
            "/time-entries",
            params={"start_date": "2025-06-15T00:00:00Z", "end_date": "2025-06-30T00:00:00Z"},
            headers=auth_headers,
        )

        assert [e["project_name"] for e in by_client.json()] == ["Early", "Late"]
        assert [e["project_name"] for e in in_range.json()] == ["Late", "Other"]


@pytest.mark.asyncio
class TestTimeEntryUpdateDelete:
    """Tests for updating and deleting time entries."""

    async def test_mark_entry_invoiced(self, app_client, auth_headers):
        """Test a partial update."""
        create_response = await app_client.post(
            "/time-entries",
            json={"project_name": "Website", "start_time": "2025-06-15T09:00:00Z", "duration": 45},
            headers=auth_headers,
        )
        entry_id = create_response.json()["id"]

        response = await app_client.put(
            f"/time-entries/{entry_id}", json={"is_invoiced": True}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["is_invoiced"] is True
        assert response.json()["duration"] == 45

    async def test_update_entry_negative_duration(self, app_client, auth_headers):
        """Test invalid updates are rejected."""
        create_response = await app_client.post(
            "/time-entries",
            json={"project_name": "Website", "start_time": "2025-06-15T09:00:00Z"},
            headers=auth_headers,
        )
        entry_id = create_response.json()["id"]

        response = await app_client.put(
            f"/time-entries/{entry_id}", json={"duration": -1}, headers=auth_headers
        )

        assert response.status_code == 400

    async def test_delete_entry(self, app_client, auth_headers):
        """Test hard delete."""
        create_response = await app_client.post(
            "/time-entries",
            json={"project_name": "Website", "start_time": "2025-06-15T09:00:00Z"},
            headers=auth_headers,
        )
        entry_id = create_response.json()["id"]

        response = await app_client.delete(f"/time-entries/{entry_id}", headers=auth_headers)
        missing = await app_client.get(f"/time-entries/{entry_id}", headers=auth_headers)

        assert response.status_code == 204
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Time entry not found"
