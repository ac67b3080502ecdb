"""Time entry model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from invoicedesk.utils.dates import minutes_between


def _require_project(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("project_name must not be empty")
    return value


class TimeEntryBase(BaseModel):
    """Base time entry fields."""

    model_config = {"allow_inf_nan": False}

    client_id: Optional[str] = None
    project_name: str
    description: str = ""
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: int = Field(default=0, ge=0)  # minutes
    hourly_rate: float = Field(default=0, ge=0)
    is_billable: bool = True
    is_invoiced: bool = False

    @field_validator("project_name")
    @classmethod
    def project_not_empty(cls, value: str) -> str:
        return _require_project(value)


class TimeEntryCreate(TimeEntryBase):
    """
    Time entry creation model.

    duration is derived from start_time/end_time when omitted. hourly_rate
    left as None is resolved from the client by the caller.
    """

    duration: Optional[int] = Field(default=None, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def fill_duration(self) -> "TimeEntryCreate":
        if self.duration is None:
            if self.end_time is not None:
                self.duration = minutes_between(self.start_time, self.end_time)
            else:
                self.duration = 0
        return self


class TimeEntryUpdate(BaseModel):
    """Time entry update model - all fields optional."""

    model_config = {"allow_inf_nan": False}

    client_id: Optional[str] = None
    project_name: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    is_billable: Optional[bool] = None
    is_invoiced: Optional[bool] = None

    @field_validator("project_name")
    @classmethod
    def project_not_empty(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_project(value)


class TimeEntry(TimeEntryBase):
    """Full time entry model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
