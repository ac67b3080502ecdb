"""Invoice service - business logic for invoices."""
from typing import Optional

from invoicedesk.models.invoice import Invoice
from invoicedesk.models.records import row_to_record
from invoicedesk.providers.base import Table
from invoicedesk.services.aggregation import filter_invoices
from invoicedesk.services.record_service import RecordService


class InvoiceService(RecordService):
    """Service for handling invoice operations."""

    table = Table.INVOICES

    async def list_invoices(
        self,
        user_id: str,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Invoice]:
        """
        List invoices for a user with optional filtering.

        Args:
            user_id: User ID
            search: Optional term matched against invoice number and client name
            status: Optional status filter ("all" or a status value)

        Returns:
            List of invoices
        """
        invoices = await self.list(user_id)
        if not search and status in (None, "all"):
            return invoices

        clients = []
        if search:
            # Client names take part in the search
            rows = await self.provider.list(Table.CLIENTS, user_id)
            clients = [row_to_record(Table.CLIENTS, row) for row in rows]

        return filter_invoices(
            invoices,
            clients,
            term=search or "",
            status=status or "all",
        )
