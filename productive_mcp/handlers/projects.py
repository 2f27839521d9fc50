from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..dependencies import get_gateway
from ..models import ListProjectsQuery, ListProjectTasksQuery
from ..productive import ProductiveClient
from .. import timesheet

router = APIRouter(prefix="/tools")


@router.post("/list_projects")
async def list_projects(payload: ListProjectsQuery, gateway: ProductiveClient = Depends(get_gateway)):
    return await timesheet.list_projects(gateway, payload)


@router.post("/list_project_tasks")
async def list_project_tasks(
    payload: ListProjectTasksQuery,
    gateway: ProductiveClient = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    return await timesheet.list_project_tasks(gateway, payload, settings)
