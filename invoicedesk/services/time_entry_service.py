"""Time entry service - business logic for time tracking."""
from datetime import datetime
from typing import Optional

from invoicedesk.models.time_entry import TimeEntry
from invoicedesk.providers.base import Table
from invoicedesk.services.rates import client_hourly_rate
from invoicedesk.services.record_service import RecordService
from invoicedesk.utils.dates import ensure_aware


class TimeEntryService(RecordService):
    """Service for handling time entry operations."""

    table = Table.TIME_ENTRIES

    async def _prepare_row(self, user_id: str, row: dict) -> dict:
        """
        Fill in the hourly rate from the client when it was not given.

        Entries without a client, or whose client no longer exists, get 0.
        """
        if row.get("hourly_rate") is None:
            row["hourly_rate"] = await client_hourly_rate(
                self.provider, user_id, row.get("client_id")
            )
        return row

    async def list_entries(
        self,
        user_id: str,
        client_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[TimeEntry]:
        """
        List time entries for a user with optional filtering.

        Args:
            user_id: User ID
            client_id: Optional client filter
            start_date: Optional lower bound on start_time (inclusive)
            end_date: Optional upper bound on start_time (inclusive)

        Returns:
            List of time entries
        """
        entries = await self.list(user_id)

        if client_id:
            entries = [entry for entry in entries if entry.client_id == client_id]
        if start_date:
            start_date = ensure_aware(start_date)
            entries = [e for e in entries if ensure_aware(e.start_time) >= start_date]
        if end_date:
            end_date = ensure_aware(end_date)
            entries = [e for e in entries if ensure_aware(e.start_time) <= end_date]

        return entries
