"""Error taxonomy shared by the providers, the record store and the services."""
from typing import Optional

from pydantic import ValidationError as PydanticValidationError


class InvoiceDeskError(Exception):
    """Base class for all application errors."""


class ValidationError(InvoiceDeskError):
    """Malformed or missing fields, rejected before any remote call."""

    def __init__(self, errors: list[dict], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Build from a Pydantic validation error."""
        return cls(field_errors(exc.errors()))


class ProviderError(InvoiceDeskError):
    """A read or write against the data provider failed."""


class NotFoundError(ProviderError):
    """The targeted record does not exist at the provider."""

    def __init__(self, table: str, record_id: str, message: Optional[str] = None):
        super().__init__(message or f"{_singular(table)} not found")
        self.table = table
        self.record_id = record_id


class NotAuthenticatedError(InvoiceDeskError):
    """A mutation was attempted without a signed-in user."""


def field_errors(errors) -> list[dict]:
    """
    Flatten Pydantic error dicts into {"field", "message"} pairs.

    The leading "body" segment FastAPI adds to request errors is dropped.
    """
    flattened = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        flattened.append({
            "field": ".".join(loc) or "__root__",
            "message": error.get("msg", "Invalid value"),
        })
    return flattened


def _singular(table: str) -> str:
    names = {
        "clients": "Client",
        "invoices": "Invoice",
        "time_entries": "Time entry",
    }
    return names.get(table, "Record")
