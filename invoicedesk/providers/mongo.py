"""MongoDB provider using Motor (async driver)."""
from typing import Optional

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from invoicedesk.errors import NotFoundError, ProviderError
from invoicedesk.providers.base import PROTECTED_FIELDS, table_name
from invoicedesk.utils.dates import utcnow


logger = structlog.get_logger(__name__)


class MongoProvider:
    """Provider storing each table as a MongoDB collection."""

    def __init__(self, db):
        """Initialize provider with a Motor database handle."""
        self.db = db

    def _collection(self, table):
        return self.db[table_name(table)]

    def _doc_to_row(self, doc: dict) -> dict:
        """
        Convert database document to a provider row.

        ObjectIds become strings so rows can be fed straight into the models.
        """
        row = dict(doc)
        row["_id"] = str(doc["_id"])
        return row

    def _object_id(self, table, record_id: str) -> ObjectId:
        """
        Parse a record id.

        Raises:
            NotFoundError: If record_id is not a valid ObjectId
        """
        try:
            return ObjectId(record_id)
        except (InvalidId, TypeError):
            raise NotFoundError(table_name(table), record_id)

    def _query(self, object_id: ObjectId, user_id: Optional[str]) -> dict:
        query = {"_id": object_id}
        if user_id is not None:
            query["user_id"] = user_id
        return query

    async def list(self, table, user_id: str) -> list[dict]:
        """
        List all rows owned by a user.

        Args:
            table: Table name
            user_id: Owner ID

        Returns:
            Rows in insertion order
        """
        try:
            cursor = self._collection(table).find({"user_id": user_id}).sort("_id", 1)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("provider_list_failed", table=table_name(table), error=str(e))
            raise ProviderError(str(e)) from e

        return [self._doc_to_row(doc) for doc in docs]

    async def get(self, table, record_id: str, user_id: Optional[str] = None) -> dict:
        object_id = self._object_id(table, record_id)
        try:
            doc = await self._collection(table).find_one(self._query(object_id, user_id))
        except PyMongoError as e:
            logger.error("provider_get_failed", table=table_name(table), error=str(e))
            raise ProviderError(str(e)) from e

        if not doc:
            raise NotFoundError(table_name(table), record_id)

        return self._doc_to_row(doc)

    async def insert(self, table, row: dict) -> dict:
        """
        Insert a row.

        Args:
            table: Table name
            row: Record fields including user_id

        Returns:
            Canonical row with generated _id and timestamps
        """
        now = utcnow()
        doc = {
            key: value
            for key, value in row.items()
            if key not in PROTECTED_FIELDS or key == "user_id"
        }
        doc["created_at"] = now
        doc["updated_at"] = now

        try:
            result = await self._collection(table).insert_one(doc)
        except PyMongoError as e:
            logger.error("provider_insert_failed", table=table_name(table), error=str(e))
            raise ProviderError(str(e)) from e

        doc["_id"] = result.inserted_id
        return self._doc_to_row(doc)

    async def update(
        self,
        table,
        record_id: str,
        fields: dict,
        user_id: Optional[str] = None,
    ) -> dict:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If no matching row exists
            ProviderError: On any driver failure
        """
        object_id = self._object_id(table, record_id)

        update_doc = {
            key: value for key, value in fields.items() if key not in PROTECTED_FIELDS
        }
        update_doc["updated_at"] = utcnow()

        try:
            updated_doc = await self._collection(table).find_one_and_update(
                self._query(object_id, user_id),
                {"$set": update_doc},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("provider_update_failed", table=table_name(table), error=str(e))
            raise ProviderError(str(e)) from e

        if not updated_doc:
            raise NotFoundError(table_name(table), record_id)

        return self._doc_to_row(updated_doc)

    async def delete(self, table, record_id: str, user_id: Optional[str] = None) -> None:
        """Hard delete a row."""
        object_id = self._object_id(table, record_id)

        try:
            result = await self._collection(table).delete_one(
                self._query(object_id, user_id)
            )
        except PyMongoError as e:
            logger.error("provider_delete_failed", table=table_name(table), error=str(e))
            raise ProviderError(str(e)) from e

        if result.deleted_count == 0:
            raise NotFoundError(table_name(table), record_id)
