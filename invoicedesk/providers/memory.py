"""In-memory provider for tests and local development."""
import copy
from typing import Optional
from uuid import uuid4

from invoicedesk.errors import NotFoundError
from invoicedesk.providers.base import PROTECTED_FIELDS, Table, table_name
from invoicedesk.utils.dates import utcnow


class InMemoryProvider:
    """
    Provider backed by one dict per table, keyed by record id.

    State lives on the instance and disappears with it. Rows are deep-copied
    on the way in and out so callers never share mutable state with the
    provider.
    """

    def __init__(self):
        self._tables: dict[str, dict[str, dict]] = {table.value: {} for table in Table}

    def _rows(self, table) -> dict[str, dict]:
        return self._tables[table_name(table)]

    def _find(self, table, record_id: str, user_id: Optional[str]) -> dict:
        name = table_name(table)
        row = self._tables[name].get(record_id)
        if row is None or (user_id is not None and row.get("user_id") != user_id):
            raise NotFoundError(name, record_id)
        return row

    async def list(self, table, user_id: str) -> list[dict]:
        return [
            copy.deepcopy(row)
            for row in self._rows(table).values()
            if row.get("user_id") == user_id
        ]

    async def get(self, table, record_id: str, user_id: Optional[str] = None) -> dict:
        return copy.deepcopy(self._find(table, record_id, user_id))

    async def insert(self, table, row: dict) -> dict:
        rows = self._rows(table)
        now = utcnow()
        record_id = uuid4().hex

        doc = {
            key: value
            for key, value in copy.deepcopy(row).items()
            if key not in PROTECTED_FIELDS or key == "user_id"
        }
        doc["_id"] = record_id
        doc["created_at"] = now
        doc["updated_at"] = now

        rows[record_id] = doc
        return copy.deepcopy(doc)

    async def update(
        self,
        table,
        record_id: str,
        fields: dict,
        user_id: Optional[str] = None,
    ) -> dict:
        doc = self._find(table, record_id, user_id)

        for key, value in copy.deepcopy(fields).items():
            if key not in PROTECTED_FIELDS:
                doc[key] = value
        doc["updated_at"] = utcnow()

        return copy.deepcopy(doc)

    async def delete(self, table, record_id: str, user_id: Optional[str] = None) -> None:
        self._find(table, record_id, user_id)
        del self._rows(table)[record_id]
