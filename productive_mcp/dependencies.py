"""FastAPI dependencies shared by the handlers."""
from datetime import date

from fastapi import Depends

from .config import Settings, get_settings
from .productive import ProductiveClient


def get_gateway(settings: Settings = Depends(get_settings)) -> ProductiveClient:
    # credentials are checked on the first request, so previews work without them
    return ProductiveClient(settings)


def get_today() -> date:
    return date.today()
