"""Per-table model registry and row/model conversion."""
from typing import NamedTuple, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from invoicedesk.errors import ProviderError, ValidationError
from invoicedesk.models.client import Client, ClientCreate, ClientUpdate
from invoicedesk.models.invoice import Invoice, InvoiceCreate, InvoiceUpdate
from invoicedesk.models.time_entry import TimeEntry, TimeEntryCreate, TimeEntryUpdate
from invoicedesk.providers.base import Table


Record = Union[Client, Invoice, TimeEntry]


class RecordType(NamedTuple):
    """The model classes used for one table."""

    model: type[BaseModel]
    create: type[BaseModel]
    update: type[BaseModel]


RECORD_TYPES: dict[Table, RecordType] = {
    Table.CLIENTS: RecordType(Client, ClientCreate, ClientUpdate),
    Table.INVOICES: RecordType(Invoice, InvoiceCreate, InvoiceUpdate),
    Table.TIME_ENTRIES: RecordType(TimeEntry, TimeEntryCreate, TimeEntryUpdate),
}


def row_to_record(table: Table, row: dict) -> Record:
    """
    Convert a provider row to its model.

    Raises:
        ProviderError: If the stored row does not match the model (data error)
    """
    try:
        return RECORD_TYPES[Table(table)].model.model_validate(row)
    except PydanticValidationError as e:
        raise ProviderError(
            f"Malformed {Table(table).value} row {row.get('_id')!r}: {e.error_count()} error(s)"
        ) from e


def parse_create(table: Table, fields: Union[BaseModel, dict]) -> dict:
    """
    Validate creation fields and return them as a storable row.

    Args:
        table: Target table
        fields: A creation model instance or a plain dict

    Returns:
        JSON-compatible dict of the record's own fields

    Raises:
        ValidationError: If the fields do not satisfy the creation model
    """
    create_model = RECORD_TYPES[Table(table)].create
    if not isinstance(fields, create_model):
        try:
            fields = create_model.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)
    return fields.model_dump(mode="json")


def parse_update(table: Table, fields: Union[BaseModel, dict]) -> dict:
    """
    Validate a partial update.

    Only supplied, non-null fields are returned.

    Raises:
        ValidationError: If any supplied field is invalid
    """
    update_model = RECORD_TYPES[Table(table)].update
    if not isinstance(fields, update_model):
        try:
            fields = update_model.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)
    return fields.model_dump(mode="json", exclude_unset=True, exclude_none=True)
