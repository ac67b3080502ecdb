"""Mutation gateway - writes to the provider, then patches the record store."""
from typing import Optional, Union

import structlog
from pydantic import BaseModel

from invoicedesk.errors import NotAuthenticatedError, ProviderError
from invoicedesk.models.records import Record, parse_create, parse_update, row_to_record
from invoicedesk.providers.base import DataProvider, Table
from invoicedesk.services.rates import client_hourly_rate
from invoicedesk.store.record_store import RecordStore


logger = structlog.get_logger(__name__)

Fields = Union[BaseModel, dict]


class CollectionGateway:
    """Create/update/delete for one table."""

    def __init__(self, table: Table, provider: DataProvider, store: RecordStore):
        """Initialize gateway for a table."""
        self.table = Table(table)
        self.provider = provider
        self.store = store

    def _require_user(self, user_id: Optional[str]) -> str:
        if user_id is None:
            raise NotAuthenticatedError(f"Sign in to modify {self.table.value}")
        return user_id

    def _store_owned_by(self, user_id: str) -> bool:
        if self.store.user_id not in (None, user_id):
            logger.warning(
                "store_patch_skipped",
                table=self.table.value,
                store_user_id=self.store.user_id,
                user_id=user_id,
            )
            return False
        return True

    async def _prepare_row(self, user_id: str, row: dict) -> dict:
        """Hook for table-specific defaults before insert."""
        return row

    async def add(self, user_id: Optional[str], fields: Fields) -> Record:
        """
        Create a record and append it to the store.

        Args:
            user_id: Signed-in user
            fields: Creation model or dict, without id or timestamps

        Returns:
            The canonical record returned by the provider

        Raises:
            NotAuthenticatedError: If user_id is None
            ValidationError: If fields are invalid (nothing is sent)
            ProviderError: If the insert fails (store untouched)
        """
        user_id = self._require_user(user_id)
        row = await self._prepare_row(user_id, parse_create(self.table, fields))
        row["user_id"] = user_id

        try:
            created = await self.provider.insert(self.table, row)
        except ProviderError as e:
            logger.warning("gateway_add_failed", table=self.table.value, error=str(e))
            raise

        record = row_to_record(self.table, created)
        if self._store_owned_by(user_id):
            self.store.apply_insert(self.table, record)

        logger.info("record_added", table=self.table.value, record_id=record.id)
        return record

    async def update(
        self, user_id: Optional[str], record_id: str, fields: Fields
    ) -> Record:
        """
        Apply a partial update and replace the record in the store.

        Raises:
            NotAuthenticatedError: If user_id is None
            ValidationError: If a supplied field is invalid
            NotFoundError: If record_id does not exist at the provider
            ProviderError: If the update fails (store untouched)
        """
        user_id = self._require_user(user_id)
        changes = parse_update(self.table, fields)

        try:
            updated = await self.provider.update(
                self.table, record_id, changes, user_id=user_id
            )
        except ProviderError as e:
            logger.warning(
                "gateway_update_failed",
                table=self.table.value,
                record_id=record_id,
                error=str(e),
            )
            raise

        record = row_to_record(self.table, updated)
        if self._store_owned_by(user_id):
            self.store.apply_update(self.table, record)

        logger.info("record_updated", table=self.table.value, record_id=record_id)
        return record

    async def remove(self, user_id: Optional[str], record_id: str) -> None:
        """
        Hard delete a record and drop it from the store. No cascade.

        Raises:
            NotAuthenticatedError: If user_id is None
            NotFoundError: If record_id does not exist at the provider
            ProviderError: If the delete fails (store untouched)
        """
        user_id = self._require_user(user_id)

        try:
            await self.provider.delete(self.table, record_id, user_id=user_id)
        except ProviderError as e:
            logger.warning(
                "gateway_remove_failed",
                table=self.table.value,
                record_id=record_id,
                error=str(e),
            )
            raise

        if self._store_owned_by(user_id):
            self.store.apply_delete(self.table, record_id)

        logger.info("record_removed", table=self.table.value, record_id=record_id)


class TimeEntryGateway(CollectionGateway):
    """Time entries take the client's hourly rate when none is given."""

    async def _prepare_row(self, user_id: str, row: dict) -> dict:
        if row.get("hourly_rate") is None:
            # Only a snapshot of user_id's own records may answer the lookup
            clients = self.store.clients if self.store.user_id == user_id else None
            row["hourly_rate"] = await client_hourly_rate(
                self.provider, user_id, row.get("client_id"), clients
            )
        return row


class MutationGateway:
    """Entry point for all writes made during a session."""

    def __init__(self, provider: DataProvider, store: RecordStore):
        self.clients = CollectionGateway(Table.CLIENTS, provider, store)
        self.invoices = CollectionGateway(Table.INVOICES, provider, store)
        self.time_entries = TimeEntryGateway(Table.TIME_ENTRIES, provider, store)

    def for_table(self, table: Table) -> CollectionGateway:
        """Look up the gateway for a table."""
        return {
            Table.CLIENTS: self.clients,
            Table.INVOICES: self.invoices,
            Table.TIME_ENTRIES: self.time_entries,
        }[Table(table)]
