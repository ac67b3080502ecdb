"""Time entry endpoints - time tracking records."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from invoicedesk.database import get_provider
from invoicedesk.errors import NotFoundError, ValidationError
from invoicedesk.models.time_entry import TimeEntry, TimeEntryCreate, TimeEntryUpdate
from invoicedesk.services.time_entry_service import TimeEntryService
from invoicedesk.utils.auth import get_current_user_id


router = APIRouter(prefix="/time-entries", tags=["time-entries"])


@router.get("", response_model=list[TimeEntry])
async def list_entries(
    client_id: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    List time entries for the authenticated user.

    - Requires authentication
    - Optional filters: client_id, start_date, end_date (on start_time)
    """
    service = TimeEntryService(provider)
    return await service.list_entries(
        user_id=user_id,
        client_id=client_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/{entry_id}", response_model=TimeEntry)
async def get_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Get a specific time entry by ID.

    - Requires authentication
    - User must own the entry
    """
    service = TimeEntryService(provider)
    try:
        return await service.get(user_id=user_id, record_id=entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=TimeEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_create: TimeEntryCreate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Create a time entry.

    - Requires authentication
    - Duration is calculated from start/end if not provided
    - Hourly rate defaults to the client's rate, or 0 without a client
    """
    service = TimeEntryService(provider)
    try:
        return await service.create(user_id=user_id, fields=entry_create)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)


@router.put("/{entry_id}", response_model=TimeEntry)
async def update_entry(
    entry_id: str,
    entry_update: TimeEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Update a time entry.

    - Requires authentication
    - User must own the entry
    """
    service = TimeEntryService(provider)
    try:
        return await service.update(
            user_id=user_id,
            record_id=entry_id,
            fields=entry_update,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Delete a time entry.

    - Requires authentication
    - User must own the entry
    - Hard delete (permanent)
    """
    service = TimeEntryService(provider)
    try:
        await service.delete(user_id=user_id, record_id=entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
