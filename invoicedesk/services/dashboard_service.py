"""Dashboard service - loads a user's records and aggregates them."""
from datetime import datetime, tzinfo
from typing import Optional

from invoicedesk.models.dashboard import DashboardSummary
from invoicedesk.providers.base import DataProvider
from invoicedesk.services.aggregation import build_dashboard
from invoicedesk.store.record_store import RecordStore


class DashboardService:
    """Service computing dashboard figures for one user."""

    def __init__(self, provider: DataProvider):
        """Initialize service with a data provider."""
        self.provider = provider

    async def get_summary(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> DashboardSummary:
        """
        Refresh a record store for the user and build the dashboard from it.

        Args:
            user_id: User ID
            now: Reference time (defaults to now)
            tz: Zone deciding calendar days (defaults to the server's zone)

        Returns:
            Dashboard summary

        Raises:
            ProviderError: If loading the records fails
        """
        store = RecordStore(self.provider)
        await store.refresh(user_id)

        return build_dashboard(
            store.clients,
            store.invoices,
            store.time_entries,
            now=now,
            tz=tz,
        )
