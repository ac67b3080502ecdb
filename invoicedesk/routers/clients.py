"""Client router - API endpoints for client management."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from invoicedesk.database import get_provider
from invoicedesk.errors import NotFoundError, ValidationError
from invoicedesk.models.client import Client, ClientCreate, ClientUpdate
from invoicedesk.services.client_service import ClientService
from invoicedesk.utils.auth import get_current_user_id


router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[Client])
async def list_clients(
    search: Optional[str] = Query(None, description="Match name, email or company"),
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    List clients for the current user.

    Args:
        search: Optional search term
        user_id: Current user ID (from token)
        provider: Data provider

    Returns:
        List of clients
    """
    service = ClientService(provider)
    return await service.list_clients(user_id=user_id, search=search)


@router.get("/{client_id}", response_model=Client)
async def get_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Get a client by ID.

    Raises:
        HTTPException: If client not found (404)
    """
    service = ClientService(provider)
    try:
        return await service.get(user_id=user_id, record_id=client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Create a new client.

    Args:
        client: Client creation data
        user_id: Current user ID (from token)
        provider: Data provider

    Returns:
        Created client object

    Raises:
        HTTPException: If the client data is invalid (400)
    """
    service = ClientService(provider)
    try:
        return await service.create(user_id=user_id, fields=client)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)


@router.put("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    client_update: ClientUpdate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Update a client. Only supplied fields change.

    Raises:
        HTTPException: If data is invalid (400) or client not found (404)
    """
    service = ClientService(provider)
    try:
        return await service.update(
            user_id=user_id,
            record_id=client_id,
            fields=client_update,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Delete a client.

    - Hard delete (permanent)
    - Invoices and time entries referencing the client are kept
    """
    service = ClientService(provider)
    try:
        await service.delete(user_id=user_id, record_id=client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
