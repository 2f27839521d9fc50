from datetime import date

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..dependencies import get_gateway, get_today
from ..models import CreateTimeEntryPayload, ListTimeEntriesQuery
from ..productive import ProductiveClient
from .. import timesheet

router = APIRouter(prefix="/tools")


@router.post("/list_time_entries")
async def list_time_entries(
    payload: ListTimeEntriesQuery,
    gateway: ProductiveClient = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    return await timesheet.list_time_entries(gateway, payload, settings)


@router.post("/create_time_entry")
async def create_time_entry(
    payload: CreateTimeEntryPayload,
    gateway: ProductiveClient = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    """Step 5: preview the entry, or create it when ``confirm`` is true."""
    return await timesheet.create_time_entry(gateway, payload, settings, today)
