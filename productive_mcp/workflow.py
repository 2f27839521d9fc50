"""Timesheet hierarchy rules and step advice.

Time entries hang off a fixed chain of upstream entities:

    Project -> Deal/Budget -> Service -> Task (optional) -> Time Entry

Each step needs identifiers picked in earlier steps. Nothing here talks to the
network; the handlers rebuild a ``HierarchyContext`` from the ids the caller
sends on every request and ask this module whether the step may proceed and
what the caller should do next.
"""
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict

from .errors import MissingRequiredField
from .parsing import format_duration

MIN_NOTE_LENGTH = 10


class WorkflowStep(str, Enum):
    PROJECT = "project"
    BUDGET = "budget"
    SERVICE = "service"
    TASK = "task"
    TIME_ENTRY = "create"


STEP_ORDER = list(WorkflowStep)


class BudgetType(IntEnum):
    DEAL = 1
    BUDGET = 2

    @property
    def label(self) -> str:
        return "Deal" if self is BudgetType.DEAL else "Budget"


class HierarchyContext(BaseModel):
    """Identifiers the caller has selected so far."""

    model_config = ConfigDict(frozen=True)

    project_id: str | None = None
    deal_id: str | None = None
    service_id: str | None = None
    task_id: str | None = None


STEP_REQUIREMENTS: dict[WorkflowStep, tuple[str, ...]] = {
    WorkflowStep.PROJECT: (),
    WorkflowStep.BUDGET: ("project_id",),
    WorkflowStep.SERVICE: ("deal_id",),
    WorkflowStep.TASK: ("project_id",),
    WorkflowStep.TIME_ENTRY: ("service_id",),
}

STEP_TOOLS = {
    WorkflowStep.PROJECT: "list_projects",
    WorkflowStep.BUDGET: "list_project_deals",
    WorkflowStep.SERVICE: "list_deal_services",
    WorkflowStep.TASK: "list_project_tasks",
    WorkflowStep.TIME_ENTRY: "create_time_entry",
}

STEP_PRODUCES = {
    WorkflowStep.PROJECT: "project_id",
    WorkflowStep.BUDGET: "deal_id",
    WorkflowStep.SERVICE: "service_id",
    WorkflowStep.TASK: "task_id",
    WorkflowStep.TIME_ENTRY: "time_entry_id",
}

STEP_TITLES = {
    WorkflowStep.PROJECT: "Project selection",
    WorkflowStep.BUDGET: "Budget/Deal selection",
    WorkflowStep.SERVICE: "Service selection",
    WorkflowStep.TASK: "Task selection (recommended)",
    WorkflowStep.TIME_ENTRY: "Time entry creation",
}

_PRODUCED_BY = {produced: step for step, produced in STEP_PRODUCES.items()}

_INSTRUCTIONS = {
    WorkflowStep.PROJECT: (
        "Call list_projects and ask the user which project the work belongs to. "
        "Note its ID as project_id."
    ),
    WorkflowStep.BUDGET: (
        "Call list_project_deals with the project_id and pick the deal or budget "
        "the time is booked against. Note its ID as deal_id."
    ),
    WorkflowStep.SERVICE: (
        "Call list_deal_services with the deal_id and pick the service that "
        "matches the kind of work. Note its ID as service_id."
    ),
    WorkflowStep.TASK: (
        "Optionally call list_project_tasks with the project_id to link the entry "
        "to a task. Note its ID as task_id, or skip straight to create_time_entry."
    ),
    WorkflowStep.TIME_ENTRY: (
        "Call create_time_entry with the service_id, date, time, person_id and a "
        "detailed note. Show the preview to the user and only repeat the call with "
        '"confirm": true once they approve it.'
    ),
}


def step_number(step: WorkflowStep) -> int:
    return STEP_ORDER.index(step) + 1


def next_step(step: WorkflowStep) -> WorkflowStep | None:
    index = STEP_ORDER.index(step)
    if index + 1 < len(STEP_ORDER):
        return STEP_ORDER[index + 1]
    return None


def missing_ancestors(step: WorkflowStep, context: HierarchyContext) -> list[str]:
    return [name for name in STEP_REQUIREMENTS[step] if not getattr(context, name)]


def require_ancestors(step: WorkflowStep, context: HierarchyContext) -> None:
    """Raise ``MissingRequiredField`` if ``step`` lacks a required identifier."""
    missing = missing_ancestors(step, context)
    if missing:
        name = missing[0]
        producer = _PRODUCED_BY[name]
        raise MissingRequiredField(
            name,
            f"{STEP_TOOLS[step]} requires {name} - select one with "
            f"{STEP_TOOLS[producer]} first (step {step_number(producer)})",
        )


def validate_time_entry(
    service_id: str | None,
    note: str | None,
    task_id: str | None = None,
    minutes: int | None = None,
) -> list[str]:
    """Check the final step and return soft warnings.

    A missing service or a too-short note is a hard failure. A missing task
    and a zero duration only produce warnings. ``task_id`` is not checked
    against the project; upstream owns that relation.
    """
    require_ancestors(WorkflowStep.TIME_ENTRY, HierarchyContext(service_id=service_id))
    if not note or len(note.strip()) < MIN_NOTE_LENGTH:
        raise MissingRequiredField(
            "note",
            f"note: Work description must be at least {MIN_NOTE_LENGTH} characters",
        )

    warnings = []
    if not task_id:
        warnings.append(
            "No task specified - consider linking the entry to a task "
            "(use list_project_tasks to find one)"
        )
    if minutes == 0:
        warnings.append(f"Duration is {format_duration(0)} - is that intended?")
    return warnings


@dataclass(frozen=True)
class Advice:
    step: WorkflowStep
    tool: str
    arguments: dict
    instruction: str
    produces: str
    redirected_from: WorkflowStep | None = None
    missing: list[str] = field(default_factory=list)

    @property
    def number(self) -> int:
        return step_number(self.step)

    @property
    def title(self) -> str:
        return STEP_TITLES[self.step]


def _arguments(step: WorkflowStep, context: HierarchyContext) -> dict:
    if step is WorkflowStep.PROJECT:
        return {}
    if step is WorkflowStep.SERVICE:
        return {"deal_id": context.deal_id}
    if step is WorkflowStep.TIME_ENTRY:
        args = {"service_id": context.service_id}
        if context.task_id:
            args["task_id"] = context.task_id
        return args
    return {"project_id": context.project_id}


def advise(step: WorkflowStep, context: HierarchyContext) -> Advice:
    """Recommend the tool call for ``step``.

    If ``step`` is missing an ancestor, the advice points back at the earliest
    step that can run with what the caller has.
    """
    target = step
    missing = missing_ancestors(target, context)
    while missing_ancestors(target, context):
        target = _PRODUCED_BY[missing_ancestors(target, context)[0]]

    return Advice(
        step=target,
        tool=STEP_TOOLS[target],
        arguments=_arguments(target, context),
        instruction=_INSTRUCTIONS[target],
        produces=STEP_PRODUCES[target],
        redirected_from=step if target is not step else None,
        missing=missing,
    )
