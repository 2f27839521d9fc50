from datetime import date

from fastapi import APIRouter, Depends

from ..dependencies import get_today
from ..models import TimesheetEntryPromptArgs, TimesheetStepPromptArgs
from .. import timesheet

router = APIRouter(prefix="/prompts")


@router.post("/timesheet_entry")
async def timesheet_entry(payload: TimesheetEntryPromptArgs, today: date = Depends(get_today)):
    return timesheet.timesheet_entry_prompt(payload, today)


@router.post("/timesheet_step")
async def timesheet_step(payload: TimesheetStepPromptArgs):
    return timesheet.timesheet_step_prompt(payload)
