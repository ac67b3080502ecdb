"""Dashboard router - aggregated figures for the signed-in user."""
from fastapi import APIRouter, Depends

from invoicedesk.database import get_provider
from invoicedesk.models.dashboard import DashboardSummary
from invoicedesk.services.dashboard_service import DashboardService
from invoicedesk.utils.auth import get_current_user_id


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    provider=Depends(get_provider),
):
    """
    Get dashboard statistics.

    - Revenue and pending totals, overdue invoices
    - Seven-day paid revenue trend and status distribution
    - Recent activity and today's tracked time
    """
    service = DashboardService(provider)
    return await service.get_summary(user_id=user_id)
