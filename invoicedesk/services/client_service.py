"""Client service - business logic for client management."""
from typing import Optional

from invoicedesk.models.client import Client
from invoicedesk.providers.base import Table
from invoicedesk.services.aggregation import search_clients
from invoicedesk.services.record_service import RecordService


class ClientService(RecordService):
    """Service for handling client operations."""

    table = Table.CLIENTS

    async def list_clients(
        self,
        user_id: str,
        search: Optional[str] = None,
    ) -> list[Client]:
        """
        List clients for a user with optional search.

        Args:
            user_id: User ID
            search: Optional term matched against name, email and company

        Returns:
            List of clients
        """
        clients = await self.list(user_id)
        if search:
            clients = search_clients(clients, search)
        return clients
