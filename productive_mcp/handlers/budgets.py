from fastapi import APIRouter, Depends

from ..dependencies import get_gateway
from ..models import ListDealServicesQuery, ListProjectDealsQuery
from ..productive import ProductiveClient
from .. import timesheet

router = APIRouter(prefix="/tools")


@router.post("/list_project_deals")
async def list_project_deals(payload: ListProjectDealsQuery, gateway: ProductiveClient = Depends(get_gateway)):
    """Step 2: deals/budgets of a project."""
    return await timesheet.list_project_deals(gateway, payload)


@router.post("/list_deal_services")
async def list_deal_services(payload: ListDealServicesQuery, gateway: ProductiveClient = Depends(get_gateway)):
    """Step 3: services of a deal/budget."""
    return await timesheet.list_deal_services(gateway, payload)
