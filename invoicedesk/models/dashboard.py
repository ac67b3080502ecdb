"""Dashboard model definitions (derived, never stored)."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from invoicedesk.models.invoice import InvoiceStatus


class ActivityKind(str, Enum):
    """Sources of activity feed items."""

    INVOICE = "invoice"
    TIME = "time"


class TrendPoint(BaseModel):
    """Paid revenue for one calendar day."""

    day: date
    label: str
    revenue: float


class StatusShare(BaseModel):
    """Invoice count and share for one status."""

    status: InvoiceStatus
    count: int
    percentage: float


class ActivityItem(BaseModel):
    """One entry in the recent activity feed."""

    kind: ActivityKind
    title: str
    subtitle: str
    amount: Optional[float] = None
    occurred_at: datetime
    status: Optional[InvoiceStatus] = None


class TodaySummary(BaseModel):
    """Time tracked today and what the billable part earned."""

    minutes: int
    earnings: float


class DashboardSummary(BaseModel):
    """Everything the dashboard shows, computed in one pass."""

    total_revenue: float
    pending_amount: float
    invoice_count: int
    client_count: int
    overdue_count: int
    overdue_total: float
    revenue_trend: list[TrendPoint]
    status_distribution: list[StatusShare]
    recent_activity: list[ActivityItem]
    today: TodaySummary
