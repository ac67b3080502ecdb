"""Tests for MongoProvider."""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from invoicedesk.errors import NotFoundError, ProviderError
from invoicedesk.providers.base import Table


def make_db(collection):
    mock_db = MagicMock()
    mock_db.__getitem__.return_value = collection
    return mock_db


@pytest.mark.asyncio
class TestMongoProviderRead:
    """Tests for list() and get()."""

    async def test_list_filters_by_owner(self):
        """Test list queries by user_id and stringifies ids."""
        from invoicedesk.providers.mongo import MongoProvider

        object_id = ObjectId()
        now = datetime.now(timezone.utc)
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[{
            "_id": object_id,
            "user_id": "user123",
            "name": "Acme",
            "created_at": now,
            "updated_at": now,
        }])
        mock_clients = MagicMock()
        mock_clients.find.return_value = cursor

        provider = MongoProvider(make_db(mock_clients))
        rows = await provider.list(Table.CLIENTS, "user123")

        mock_clients.find.assert_called_once_with({"user_id": "user123"})
        assert rows[0]["_id"] == str(object_id)
        assert rows[0]["name"] == "Acme"

    async def test_list_driver_failure(self):
        """Test driver errors become provider errors."""
        from invoicedesk.providers.mongo import MongoProvider

        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
        mock_invoices = MagicMock()
        mock_invoices.find.return_value = cursor

        provider = MongoProvider(make_db(mock_invoices))

        with pytest.raises(ProviderError, match="no servers"):
            await provider.list(Table.INVOICES, "user123")

    async def test_get_invalid_id_is_not_found(self):
        """Test a malformed id is reported as missing."""
        from invoicedesk.providers.mongo import MongoProvider

        mock_clients = AsyncMock()
        provider = MongoProvider(make_db(mock_clients))

        with pytest.raises(NotFoundError):
            await provider.get(Table.CLIENTS, "not-an-object-id")

        mock_clients.find_one.assert_not_called()

    async def test_get_scoped_to_owner(self):
        """Test get adds the user filter."""
        from invoicedesk.providers.mongo import MongoProvider

        object_id = ObjectId()
        mock_clients = AsyncMock()
        mock_clients.find_one.return_value = None

        provider = MongoProvider(make_db(mock_clients))

        with pytest.raises(NotFoundError, match="Client not found"):
            await provider.get(Table.CLIENTS, str(object_id), user_id="user123")

        mock_clients.find_one.assert_called_once_with(
            {"_id": object_id, "user_id": "user123"}
        )


@pytest.mark.asyncio
class TestMongoProviderWrite:
    """Tests for insert(), update() and delete()."""

    async def test_insert_returns_canonical_row(self):
        """Test insert stamps timestamps and returns the generated id."""
        from invoicedesk.providers.mongo import MongoProvider

        inserted_id = ObjectId()
        mock_clients = AsyncMock()
        mock_clients.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        provider = MongoProvider(make_db(mock_clients))
        row = await provider.insert(
            Table.CLIENTS, {"user_id": "user123", "name": "Acme", "_id": "ignored"}
        )

        stored_doc = mock_clients.insert_one.call_args.args[0]
        assert "_id" not in stored_doc or stored_doc["_id"] == inserted_id
        assert row["_id"] == str(inserted_id)
        assert row["user_id"] == "user123"
        assert row["created_at"] == row["updated_at"]

    async def test_insert_driver_failure(self):
        """Test insert failures become provider errors."""
        from invoicedesk.providers.mongo import MongoProvider

        mock_clients = AsyncMock()
        mock_clients.insert_one.side_effect = ServerSelectionTimeoutError("down")

        provider = MongoProvider(make_db(mock_clients))

        with pytest.raises(ProviderError):
            await provider.insert(Table.CLIENTS, {"user_id": "user123", "name": "Acme"})

    async def test_update_sets_fields_and_updated_at(self):
        """Test update issues a $set without protected fields."""
        from invoicedesk.providers.mongo import MongoProvider

        object_id = ObjectId()
        now = datetime.now(timezone.utc)
        mock_invoices = AsyncMock()
        mock_invoices.find_one_and_update.return_value = {
            "_id": object_id,
            "user_id": "user123",
            "status": "paid",
            "created_at": now,
            "updated_at": now,
        }

        provider = MongoProvider(make_db(mock_invoices))
        row = await provider.update(
            Table.INVOICES,
            str(object_id),
            {"status": "paid", "created_at": "tampered"},
            user_id="user123",
        )

        query, update = mock_invoices.find_one_and_update.call_args.args[:2]
        assert query == {"_id": object_id, "user_id": "user123"}
        assert update["$set"]["status"] == "paid"
        assert "created_at" not in update["$set"]
        assert "updated_at" in update["$set"]
        assert row["_id"] == str(object_id)

    async def test_update_missing_raises_not_found(self):
        """Test update of a missing row."""
        from invoicedesk.providers.mongo import MongoProvider

        mock_invoices = AsyncMock()
        mock_invoices.find_one_and_update.return_value = None

        provider = MongoProvider(make_db(mock_invoices))

        with pytest.raises(NotFoundError, match="Invoice not found"):
            await provider.update(Table.INVOICES, str(ObjectId()), {"status": "paid"})

    async def test_delete_missing_raises_not_found(self):
        """Test delete of a missing row."""
        from invoicedesk.providers.mongo import MongoProvider

        mock_entries = AsyncMock()
        mock_entries.delete_one.return_value = MagicMock(deleted_count=0)

        provider = MongoProvider(make_db(mock_entries))

        with pytest.raises(NotFoundError):
            await provider.delete(Table.TIME_ENTRIES, str(ObjectId()))

    async def test_delete_success(self):
        """Test a successful hard delete."""
        from invoicedesk.providers.mongo import MongoProvider

        object_id = ObjectId()
        mock_entries = AsyncMock()
        mock_entries.delete_one.return_value = MagicMock(deleted_count=1)

        provider = MongoProvider(make_db(mock_entries))
        await provider.delete(Table.TIME_ENTRIES, str(object_id), user_id="user123")

        mock_entries.delete_one.assert_called_once_with(
            {"_id": object_id, "user_id": "user123"}
        )

    async def test_unknown_table(self):
        """Test unknown tables are rejected."""
        from invoicedesk.providers.mongo import MongoProvider

        provider = MongoProvider(make_db(AsyncMock()))

        with pytest.raises(ProviderError, match="Unknown table"):
            await provider.insert("payments", {"user_id": "user123"})
