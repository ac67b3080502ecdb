"""Hourly rate defaults for time entries."""
from typing import Optional, Sequence

from invoicedesk.errors import NotFoundError
from invoicedesk.models.client import Client
from invoicedesk.providers.base import DataProvider, Table
from invoicedesk.services.aggregation import find_client


async def client_hourly_rate(
    provider: DataProvider,
    user_id: str,
    client_id: Optional[str],
    clients: Optional[Sequence[Client]] = None,
) -> float:
    """
    Hourly rate a new time entry inherits from its client.

    Args:
        provider: Data provider, queried scoped to user_id
        user_id: Owner of the entry
        client_id: Referenced client, may be None or dangling
        clients: The owner's clients when already loaded

    Returns:
        The client's rate, or 0 when the client is missing or not user_id's
    """
    if not client_id:
        return 0

    if clients is not None:
        client = find_client(clients, client_id)
        if client is not None:
            return client.hourly_rate

    try:
        row = await provider.get(Table.CLIENTS, client_id, user_id=user_id)
    except NotFoundError:
        return 0
    return row.get("hourly_rate", 0)
