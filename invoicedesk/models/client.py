"""Client model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def _require_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be empty")
    return value


def _dedupe_tags(tags: list[str]) -> list[str]:
    seen = set()
    ordered = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            ordered.append(tag)
    return ordered


class ClientBase(BaseModel):
    """Base client fields."""

    model_config = {"allow_inf_nan": False}

    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company: Optional[str] = None
    hourly_rate: float = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, value: str) -> str:
        return _require_name(value)

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value: list[str]) -> list[str]:
        return _dedupe_tags(value)


class ClientCreate(ClientBase):
    """Client creation model."""

    pass


class ClientUpdate(BaseModel):
    """Client update model - all fields optional."""

    model_config = {"allow_inf_nan": False}

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    tags: Optional[list[str]] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_name(value)

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value
        return _dedupe_tags(value)


class Client(ClientBase):
    """Full client model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
