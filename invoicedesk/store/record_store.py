"""Record store - in-session snapshot of one user's records."""
import asyncio
from enum import Enum
from typing import Optional

import structlog

from invoicedesk.errors import ProviderError
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice
from invoicedesk.models.records import Record, row_to_record
from invoicedesk.models.time_entry import TimeEntry
from invoicedesk.providers.base import DataProvider, Table


logger = structlog.get_logger(__name__)


class StoreStatus(str, Enum):
    """Snapshot lifecycle states."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class RecordStore:
    """
    Read-through, write-around cache of the clients, invoices and time
    entries belonging to one user.

    The provider stays the durable source of truth. The store is replaced
    wholesale by refresh() and patched record by record by the mutation
    gateway once the provider has confirmed a write. Readers get tuples.
    """

    def __init__(self, provider: DataProvider):
        """Initialize store with a data provider."""
        self.provider = provider
        self.status = StoreStatus.UNINITIALIZED
        self.user_id: Optional[str] = None
        self._collections: dict[Table, list[Record]] = {table: [] for table in Table}

    @property
    def loading(self) -> bool:
        return self.status is StoreStatus.LOADING

    @property
    def clients(self) -> tuple[Client, ...]:
        return tuple(self._collections[Table.CLIENTS])

    @property
    def invoices(self) -> tuple[Invoice, ...]:
        return tuple(self._collections[Table.INVOICES])

    @property
    def time_entries(self) -> tuple[TimeEntry, ...]:
        return tuple(self._collections[Table.TIME_ENTRIES])

    def collection(self, table: Table) -> tuple[Record, ...]:
        """Snapshot of one collection by table name."""
        return tuple(self._collections[Table(table)])

    async def refresh(self, user_id: Optional[str]) -> None:
        """
        Reload all three collections for a user.

        The three reads run concurrently. Collections are replaced only when
        every read succeeds; otherwise the error propagates and the current
        snapshot is kept. The status ends up READY either way.

        Args:
            user_id: Signed-in user, or None (refresh is then a no-op)

        Raises:
            ProviderError: If any of the reads fails
        """
        if user_id is None:
            logger.debug("store_refresh_skipped", reason="no_user")
            return

        self.status = StoreStatus.LOADING
        try:
            results = await asyncio.gather(
                *(self.provider.list(table, user_id) for table in Table)
            )
            collections = {
                table: [row_to_record(table, row) for row in rows]
                for table, rows in zip(Table, results)
            }
        except ProviderError as e:
            logger.error("store_refresh_failed", user_id=user_id, error=str(e))
            raise
        finally:
            self.status = StoreStatus.READY

        self._collections = collections
        self.user_id = user_id
        logger.info(
            "store_refreshed",
            user_id=user_id,
            clients=len(collections[Table.CLIENTS]),
            invoices=len(collections[Table.INVOICES]),
            time_entries=len(collections[Table.TIME_ENTRIES]),
        )

    # Patch methods below are called by the mutation gateway only, after the
    # provider has confirmed the write.

    def apply_insert(self, table: Table, record: Record) -> None:
        """Append a canonical record."""
        table = Table(table)
        self._collections[table] = [*self._collections[table], record]

    def apply_update(self, table: Table, record: Record) -> None:
        """Replace the record with the same id. Unknown ids are ignored."""
        table = Table(table)
        self._collections[table] = [
            record if existing.id == record.id else existing
            for existing in self._collections[table]
        ]

    def apply_delete(self, table: Table, record_id: str) -> None:
        """Drop the record with the given id."""
        table = Table(table)
        self._collections[table] = [
            existing for existing in self._collections[table] if existing.id != record_id
        ]
