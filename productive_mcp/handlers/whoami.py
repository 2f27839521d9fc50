from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..dependencies import get_gateway
from ..productive import ProductiveClient
from .. import timesheet

router = APIRouter(prefix="/tools")


@router.post("/whoami")
async def whoami(gateway: ProductiveClient = Depends(get_gateway), settings: Settings = Depends(get_settings)):
    return await timesheet.whoami(gateway, settings)
