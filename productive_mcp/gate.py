"""Confirm-before-commit for time entry creation.

There is no session between calls. A call without ``confirmed`` only returns
a preview; the caller has to send the same parameters again with the flag set
for the write to happen. Each call builds and validates its own draft, so a
stale preview can never be completed by accident.
"""
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from .parsing import format_duration
from .workflow import validate_time_entry

logger = logging.getLogger(__name__)


class TimeEntryDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    minutes: int = Field(ge=0)
    billable_minutes: int | None = Field(default=None, ge=0)
    person_id: str
    service_id: str
    task_id: str | None = None
    note: str
    confirmed: bool = False
    # the caller wrote "me" for the person
    person_is_me: bool = False

    def productive_body(self) -> dict:
        attributes = {"date": self.date, "time": self.minutes}
        if self.billable_minutes is not None:
            attributes["billable_time"] = self.billable_minutes
        if self.note:
            attributes["note"] = self.note

        relationships = {
            "person": {"data": {"id": self.person_id, "type": "people"}},
            "service": {"data": {"id": self.service_id, "type": "services"}},
        }
        if self.task_id:
            relationships["task"] = {"data": {"id": self.task_id, "type": "tasks"}}

        return {
            "data": {
                "type": "time_entries",
                "attributes": attributes,
                "relationships": relationships,
            }
        }


@dataclass(frozen=True)
class PreviewResult:
    draft: TimeEntryDraft
    text: str
    warnings: list[str] = field(default_factory=list)
    committed = False


@dataclass(frozen=True)
class CommitResult:
    draft: TimeEntryDraft
    entry: dict
    committed = True


CommitFn = Callable[[TimeEntryDraft], Awaitable[dict]]


def render_preview(draft: TimeEntryDraft, warnings=()) -> str:
    lines = [
        "Time Entry Ready to Create:",
        "",
        f"Date: {draft.date}",
        f"Time: {format_duration(draft.minutes)}",
    ]
    if draft.billable_minutes is not None:
        lines.append(f"Billable Time: {format_duration(draft.billable_minutes)}")
    lines.append(f"Person ID: {draft.person_id}{' (me)' if draft.person_is_me else ''}")
    lines.append(f"Service ID: {draft.service_id}")
    lines.append(f"Task ID: {draft.task_id}" if draft.task_id else "No task specified")
    lines.append(f"Note: {draft.note}")
    if warnings:
        lines.append("")
        lines.extend(f"Warning: {w}" for w in warnings)
    lines.append("")
    lines.append(
        "To create this time entry, call this tool again with the same parameters "
        'and add "confirm": true'
    )
    return "\n".join(lines)


async def gate(draft: TimeEntryDraft, commit_fn: CommitFn) -> PreviewResult | CommitResult:
    """Preview ``draft`` unless it is confirmed, otherwise commit it once.

    The draft is validated again on both paths; an invalid draft raises
    before anything is written.
    """
    warnings = validate_time_entry(draft.service_id, draft.note, draft.task_id, draft.minutes)
    if not draft.confirmed:
        logger.debug("Previewing time entry for person %s on %s", draft.person_id, draft.date)
        return PreviewResult(draft=draft, text=render_preview(draft, warnings), warnings=warnings)

    logger.info("Creating time entry for person %s on %s", draft.person_id, draft.date)
    entry = await commit_fn(draft)
    return CommitResult(draft=draft, entry=entry)
