"""Invoice router - API endpoints for invoices."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from invoicedesk.database import get_provider
from invoicedesk.errors import NotFoundError, ValidationError
from invoicedesk.models.invoice import Invoice, InvoiceCreate, InvoiceUpdate
from invoicedesk.services.invoice_service import InvoiceService
from invoicedesk.utils.auth import get_current_user_id


router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=list[Invoice])
async def list_invoices(
    search: Optional[str] = Query(None, description="Match invoice number or client name"),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    List invoices for the current user.

    Args:
        search: Optional search term
        status_filter: Optional status ("all" or a status value)
        user_id: Current user ID (from token)
        provider: Data provider

    Returns:
        List of invoices
    """
    service = InvoiceService(provider)
    return await service.list_invoices(
        user_id=user_id,
        search=search,
        status=status_filter,
    )


@router.get("/{invoice_id}", response_model=Invoice)
async def get_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Get an invoice by ID.

    Raises:
        HTTPException: If invoice not found (404)
    """
    service = InvoiceService(provider)
    try:
        return await service.get(user_id=user_id, record_id=invoice_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice: InvoiceCreate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Create a new invoice.

    - total is stored as given, never recomputed
    - client_id is not checked against existing clients
    """
    service = InvoiceService(provider)
    try:
        return await service.create(user_id=user_id, fields=invoice)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(
    invoice_id: str,
    invoice_update: InvoiceUpdate,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Update an invoice. Only supplied fields change.

    Raises:
        HTTPException: If data is invalid (400) or invoice not found (404)
    """
    service = InvoiceService(provider)
    try:
        return await service.update(
            user_id=user_id,
            record_id=invoice_id,
            fields=invoice_update,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """Delete an invoice (hard delete)."""
    service = InvoiceService(provider)
    try:
        await service.delete(user_id=user_id, record_id=invoice_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
