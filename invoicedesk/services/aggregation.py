"""Aggregation engine - dashboard figures derived from current records.

Every function here is pure: it reads the sequences it is given, never
mutates them and never caches. Functions that depend on the clock take
``now`` (defaults to the current UTC time) and ``tz`` (defaults to the
system local zone, which decides what "today" means).
"""
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from invoicedesk.models.client import Client
from invoicedesk.models.dashboard import (
    ActivityItem,
    ActivityKind,
    DashboardSummary,
    StatusShare,
    TodaySummary,
    TrendPoint,
)
from invoicedesk.models.invoice import Invoice, InvoiceStatus
from invoicedesk.models.time_entry import TimeEntry
from invoicedesk.utils.dates import ensure_aware, local_date, local_midnight, utcnow


UNKNOWN_CLIENT = "Unknown Client"

TREND_DAYS = 7
DISTRIBUTION_STATUSES = (
    InvoiceStatus.PAID,
    InvoiceStatus.SENT,
    InvoiceStatus.DRAFT,
    InvoiceStatus.OVERDUE,
)
PENDING_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)

ACTIVITY_INVOICES = 5
ACTIVITY_TIME_ENTRIES = 3
ACTIVITY_LIMIT = 8


def _now(now: Optional[datetime]) -> datetime:
    return ensure_aware(now) if now is not None else utcnow()


def find_client(clients: Iterable[Client], client_id: Optional[str]) -> Optional[Client]:
    """Resolve a client reference. Dangling or missing ids give None."""
    if client_id is None:
        return None
    for client in clients:
        if client.id == client_id:
            return client
    return None


def client_display_name(clients: Iterable[Client], client_id: Optional[str]) -> str:
    """Client name for display, "Unknown Client" when the reference dangles."""
    client = find_client(clients, client_id)
    return client.name if client else UNKNOWN_CLIENT


def total_revenue(invoices: Iterable[Invoice]) -> float:
    """Sum of totals over paid invoices."""
    return sum(inv.total for inv in invoices if inv.status == InvoiceStatus.PAID)


def pending_amount(invoices: Iterable[Invoice]) -> float:
    """Sum of totals over sent and overdue invoices."""
    return sum(inv.total for inv in invoices if inv.status in PENDING_STATUSES)


def is_overdue(
    invoice: Invoice, now: Optional[datetime] = None, tz: Optional[tzinfo] = None
) -> bool:
    """
    Whether an invoice belongs in the overdue set.

    Invoices marked overdue always do. Sent invoices do once the start of
    their due date (in tz) lies strictly before now. The two conditions are
    independent: an overdue invoice is never re-checked against its due date.
    """
    if invoice.status == InvoiceStatus.OVERDUE:
        return True
    if invoice.status == InvoiceStatus.SENT:
        return local_midnight(invoice.due_date, tz) < _now(now)
    return False


def overdue_invoices(
    invoices: Iterable[Invoice],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[Invoice]:
    """Overdue set, in collection order."""
    now = _now(now)
    return [inv for inv in invoices if is_overdue(inv, now, tz)]


def overdue_total(
    invoices: Iterable[Invoice],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> float:
    """Sum of totals over the overdue set."""
    return sum(inv.total for inv in overdue_invoices(invoices, now, tz))


def revenue_trend(
    invoices: Sequence[Invoice],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[TrendPoint]:
    """
    Paid revenue for each of the last seven days, oldest first, ending today.

    An invoice counts towards the day its created_at falls on in tz.
    Days without paid invoices report 0.
    """
    today = local_date(_now(now), tz)
    paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]

    points = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        revenue = sum(inv.total for inv in paid if local_date(inv.created_at, tz) == day)
        points.append(TrendPoint(day=day, label=day.strftime("%b %d"), revenue=revenue))
    return points


def status_distribution(invoices: Sequence[Invoice]) -> list[StatusShare]:
    """Count and percentage of invoices per status, 0% across the board when empty."""
    total = len(invoices)
    shares = []
    for status in DISTRIBUTION_STATUSES:
        count = sum(1 for inv in invoices if inv.status == status)
        percentage = (count / total) * 100 if total > 0 else 0.0
        shares.append(StatusShare(status=status, count=count, percentage=percentage))
    return shares


def format_duration(minutes: int) -> str:
    """
    Render minutes as hours and minutes.

    Example:
        >>> format_duration(135)
        '2h 15m'
    """
    return f"{minutes // 60}h {minutes % 60}m"


def entry_amount(entry: TimeEntry) -> float:
    """What a time entry is worth at its hourly rate."""
    return (entry.duration / 60) * entry.hourly_rate


def recent_activity(
    invoices: Sequence[Invoice],
    time_entries: Sequence[TimeEntry],
    clients: Sequence[Client],
) -> list[ActivityItem]:
    """
    Merged feed of recent invoices and time entries, newest first.

    The last five invoices and last three time entries are taken in
    collection order before merging, so when a collection is not ordered by
    time the feed may miss newer records further up. This is the existing
    behavior and is kept on purpose.
    """
    items = [
        ActivityItem(
            kind=ActivityKind.INVOICE,
            title=f"Invoice {inv.invoice_number}",
            subtitle=client_display_name(clients, inv.client_id),
            amount=inv.total,
            occurred_at=inv.created_at,
            status=inv.status,
        )
        for inv in invoices[-ACTIVITY_INVOICES:]
    ]
    items.extend(
        ActivityItem(
            kind=ActivityKind.TIME,
            title=entry.project_name,
            subtitle=format_duration(entry.duration),
            occurred_at=entry.created_at,
        )
        for entry in time_entries[-ACTIVITY_TIME_ENTRIES:]
    )

    items.sort(key=lambda item: ensure_aware(item.occurred_at), reverse=True)
    return items[:ACTIVITY_LIMIT]


def today_summary(
    time_entries: Iterable[TimeEntry],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> TodaySummary:
    """
    Minutes tracked today and earnings from today's billable entries.

    "Today" compares the local calendar date of created_at with the local
    calendar date of now.
    """
    today = local_date(_now(now), tz)
    todays = [entry for entry in time_entries if local_date(entry.created_at, tz) == today]

    return TodaySummary(
        minutes=sum(entry.duration for entry in todays),
        earnings=sum(entry_amount(entry) for entry in todays if entry.is_billable),
    )


def search_clients(clients: Iterable[Client], term: str) -> list[Client]:
    """Clients whose name, email or company contains term, ignoring case."""
    term = term.lower()
    return [
        client
        for client in clients
        if term in client.name.lower()
        or (client.email and term in client.email.lower())
        or (client.company and term in client.company.lower())
    ]


def filter_invoices(
    invoices: Iterable[Invoice],
    clients: Sequence[Client],
    term: str = "",
    status: str = "all",
) -> list[Invoice]:
    """
    Invoices matching a search term and a status filter.

    The term is matched, ignoring case, against the invoice number and the
    resolved client name. status is "all" or one InvoiceStatus value.
    """
    term = term.lower()
    matches = []
    for inv in invoices:
        client = find_client(clients, inv.client_id)
        matches_search = term in inv.invoice_number.lower() or (
            client is not None and term in client.name.lower()
        )
        matches_status = status == "all" or inv.status.value == status
        if matches_search and matches_status:
            matches.append(inv)
    return matches


def build_dashboard(
    clients: Sequence[Client],
    invoices: Sequence[Invoice],
    time_entries: Sequence[TimeEntry],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> DashboardSummary:
    """Compute every dashboard figure from the given records."""
    now = _now(now)
    overdue = overdue_invoices(invoices, now, tz)

    return DashboardSummary(
        total_revenue=total_revenue(invoices),
        pending_amount=pending_amount(invoices),
        invoice_count=len(invoices),
        client_count=len(clients),
        overdue_count=len(overdue),
        overdue_total=sum(inv.total for inv in overdue),
        revenue_trend=revenue_trend(invoices, now, tz),
        status_distribution=status_distribution(invoices),
        recent_activity=recent_activity(invoices, time_entries, clients),
        today=today_summary(time_entries, now, tz),
    )
