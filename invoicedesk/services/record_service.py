"""Record service - user-scoped CRUD shared by the REST services."""
from typing import Union

import structlog
from pydantic import BaseModel

from invoicedesk.models.records import Record, parse_create, parse_update, row_to_record
from invoicedesk.providers.base import DataProvider, Table


logger = structlog.get_logger(__name__)


class RecordService:
    """
    Base service for handling CRUD on one table.

    Subclasses set ``table`` and may override ``_prepare_row`` to fill in
    defaults before insert.
    """

    table: Table

    def __init__(self, provider: DataProvider):
        """Initialize service with a data provider."""
        self.provider = provider

    async def _prepare_row(self, user_id: str, row: dict) -> dict:
        return row

    async def list(self, user_id: str) -> list[Record]:
        """
        List all records owned by a user.

        Args:
            user_id: User ID

        Returns:
            Records in insertion order
        """
        rows = await self.provider.list(self.table, user_id)
        return [row_to_record(self.table, row) for row in rows]

    async def get(self, user_id: str, record_id: str) -> Record:
        """
        Get a record by ID.

        Raises:
            NotFoundError: If the record does not exist or is not owned by user_id
        """
        row = await self.provider.get(self.table, record_id, user_id=user_id)
        return row_to_record(self.table, row)

    async def create(self, user_id: str, fields: Union[BaseModel, dict]) -> Record:
        """
        Create a record.

        Args:
            user_id: User ID who owns the record
            fields: Creation model or dict

        Returns:
            Created record

        Raises:
            ValidationError: If fields are invalid
            ProviderError: If the insert fails
        """
        row = await self._prepare_row(user_id, parse_create(self.table, fields))
        row["user_id"] = user_id

        created = await self.provider.insert(self.table, row)
        record = row_to_record(self.table, created)

        logger.info("record_created", table=self.table.value, record_id=record.id)
        return record

    async def update(
        self, user_id: str, record_id: str, fields: Union[BaseModel, dict]
    ) -> Record:
        """
        Update a record. Only supplied fields change; updated_at is refreshed.

        Raises:
            ValidationError: If a supplied field is invalid
            NotFoundError: If the record does not exist
        """
        changes = parse_update(self.table, fields)
        updated = await self.provider.update(
            self.table, record_id, changes, user_id=user_id
        )
        record = row_to_record(self.table, updated)

        logger.info("record_updated", table=self.table.value, record_id=record_id)
        return record

    async def delete(self, user_id: str, record_id: str) -> None:
        """
        Hard delete a record. Records referencing it are left alone.

        Raises:
            NotFoundError: If the record does not exist
        """
        await self.provider.delete(self.table, record_id, user_id=user_id)
        logger.info("record_deleted", table=self.table.value, record_id=record_id)
