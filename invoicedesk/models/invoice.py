"""Invoice model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceItem(BaseModel):
    """A single invoice line. amount is quantity x rate by convention only."""

    model_config = {"allow_inf_nan": False}

    id: str = Field(default_factory=lambda: uuid4().hex)
    description: str = ""
    quantity: float = 1
    rate: float = 0
    amount: float = 0


def _require_number(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("invoice_number must not be empty")
    return value


class InvoiceBase(BaseModel):
    """Base invoice fields."""

    model_config = {"allow_inf_nan": False}

    client_id: str
    invoice_number: str
    status: InvoiceStatus = InvoiceStatus.DRAFT
    issue_date: date
    due_date: date
    subtotal: float = 0
    tax_rate: float = 0
    tax_amount: float = 0
    total: float
    currency: str = "USD"
    notes: Optional[str] = None
    items: list[InvoiceItem] = Field(default_factory=list)

    @field_validator("invoice_number")
    @classmethod
    def number_not_empty(cls, value: str) -> str:
        return _require_number(value)


class InvoiceCreate(InvoiceBase):
    """Invoice creation model."""

    pass


class InvoiceUpdate(BaseModel):
    """Invoice update model - all fields optional."""

    model_config = {"allow_inf_nan": False}

    client_id: Optional[str] = None
    invoice_number: Optional[str] = None
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    subtotal: Optional[float] = None
    tax_rate: Optional[float] = None
    tax_amount: Optional[float] = None
    total: Optional[float] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[list[InvoiceItem]] = None

    @field_validator("invoice_number")
    @classmethod
    def number_not_empty(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_number(value)


class Invoice(InvoiceBase):
    """Full invoice model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
