"""Provider protocol and table names.

A provider is the durable source of truth for the three record tables. Every
row it returns is a plain dict carrying ``_id``, ``user_id``, ``created_at``
and ``updated_at`` next to the record's own fields.
"""
from enum import Enum
from typing import Any, Optional, Protocol

from invoicedesk.errors import ProviderError


class Table(str, Enum):
    """Logical tables held by a provider."""

    CLIENTS = "clients"
    INVOICES = "invoices"
    TIME_ENTRIES = "time_entries"


# Fields a caller may never overwrite through update()
PROTECTED_FIELDS = frozenset({"_id", "id", "user_id", "created_at", "updated_at"})


def table_name(table: Any) -> str:
    """
    Validate and normalise a table argument.

    Raises:
        ProviderError: If the table is not one of the known tables
    """
    try:
        return Table(table).value
    except ValueError:
        raise ProviderError(f"Unknown table: {table}")


class DataProvider(Protocol):
    """Repository interface every storage backend implements."""

    async def list(self, table: str, user_id: str) -> list[dict]:
        """Return all rows of a table owned by user_id, oldest first."""
        ...

    async def get(
        self, table: str, record_id: str, user_id: Optional[str] = None
    ) -> dict:
        """Return one row, raising NotFoundError if absent (or not owned)."""
        ...

    async def insert(self, table: str, row: dict) -> dict:
        """Insert a row and return the canonical record with id and timestamps."""
        ...

    async def update(
        self,
        table: str,
        record_id: str,
        fields: dict,
        user_id: Optional[str] = None,
    ) -> dict:
        """Apply a partial update and return the canonical record."""
        ...

    async def delete(
        self, table: str, record_id: str, user_id: Optional[str] = None
    ) -> None:
        """Hard-delete a row, raising NotFoundError if absent."""
        ...
