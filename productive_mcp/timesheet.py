"""Timesheet workflow operations.

Every function here is one tool or prompt call: it validates what the caller
sent, makes at most one write (and only after confirmation) against the
Productive gateway, and renders the text shown to the agent.
"""
import json
import logging
from datetime import date

from .config import Settings
from .errors import MalformedDuration, UpstreamRejected
from .gate import TimeEntryDraft, gate
from .identity import ME, resolve_actor
from .models import (
    CreateTimeEntryPayload,
    ListDealServicesQuery,
    ListProjectDealsQuery,
    ListProjectsQuery,
    ListProjectTasksQuery,
    ListTimeEntriesQuery,
    TimesheetEntryPromptArgs,
    TimesheetStepPromptArgs,
)
from .parsing import format_duration, parse_date, parse_duration
from .productive import ProductiveClient
from .workflow import (
    STEP_ORDER,
    STEP_TITLES,
    STEP_TOOLS,
    BudgetType,
    HierarchyContext,
    WorkflowStep,
    advise,
    next_step,
    require_ancestors,
    step_number,
    validate_time_entry,
)

logger = logging.getLogger(__name__)


def _rel_id(record: dict, name: str) -> str | None:
    data = ((record.get("relationships") or {}).get(name) or {}).get("data")
    return data.get("id") if isinstance(data, dict) else None


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _showing(response: dict, count: int) -> str:
    total = (response.get("meta") or {}).get("total_count")
    return f" (showing {count} of {total})" if total else ""


def _next_hint(step: WorkflowStep) -> str:
    following = next_step(step)
    if following is None:
        return ""
    return f"\n\nNext: step {step_number(following)} - {STEP_TITLES[following]} ({STEP_TOOLS[following]})"


# --- time entries -----------------------------------------------------------

def annotate_time_entry(record: dict) -> dict:
    attributes = record.get("attributes") or {}
    minutes = attributes.get("time") or 0
    billable = attributes.get("billable_time")
    entry = {
        "id": record.get("id"),
        "date": attributes.get("date"),
        "minutes": minutes,
        "duration": format_duration(minutes),
        "billable_minutes": billable,
        "billable_duration": None,
        "note": attributes.get("note"),
        "person_id": _rel_id(record, "person"),
        "service_id": _rel_id(record, "service"),
        "task_id": _rel_id(record, "task"),
        "project_id": _rel_id(record, "project"),
    }
    if billable is not None and billable != minutes:
        entry["billable_duration"] = format_duration(billable)
    return entry


def _entry_text(entry: dict) -> str:
    billable = f" (Billable: {entry['billable_duration']})" if entry["billable_duration"] else ""
    return (
        f"• Time Entry (ID: {entry['id']})\n"
        f"  Date: {entry['date']}\n"
        f"  Time: {entry['duration']}{billable}\n"
        f"  Note: {entry['note'] or 'No note'}\n"
        f"  Person ID: {entry['person_id'] or 'Unknown'}\n"
        f"  Service ID: {entry['service_id'] or 'Unknown'}\n"
        f"  Task ID: {entry['task_id'] or 'None'}\n"
        f"  Project ID: {entry['project_id'] or 'None'}"
    )


async def list_time_entries(gateway: ProductiveClient, query: ListTimeEntriesQuery, settings: Settings) -> dict:
    person_id = resolve_actor(query.person_id, settings.user_id)
    response = await gateway.list_time_entries(
        date=query.date,
        after=query.after,
        before=query.before,
        person_id=person_id,
        project_id=query.project_id,
        task_id=query.task_id,
        service_id=query.service_id,
        limit=query.limit,
    )
    entries = [annotate_time_entry(record) for record in response.get("data") or []]
    total_minutes = sum(entry["minutes"] for entry in entries)
    logger.debug("Found %d time entries, %d minutes", len(entries), total_minutes)

    if entries:
        count = len(entries)
        text = (
            f"Found {count} time {_plural(count, 'entry', 'entries')}{_showing(response, count)}:\n\n"
            f"Total Time: {format_duration(total_minutes)}\n\n"
            + "\n\n".join(_entry_text(entry) for entry in entries)
        )
    else:
        text = "No time entries found matching the criteria."

    return {
        "status": "success",
        "formatted_output": text,
        "entries": entries,
        "total_entries": len(entries),
        "total_count": (response.get("meta") or {}).get("total_count"),
        "total_minutes": total_minutes,
        "total_duration": format_duration(total_minutes),
    }


def build_time_entry_draft(payload: CreateTimeEntryPayload, settings: Settings, today: date) -> TimeEntryDraft:
    """Validate and normalize a create request; no network access."""
    person_id = resolve_actor(payload.person_id, settings.user_id)
    entry_date = parse_date(payload.date, today)
    minutes = parse_duration(payload.time)

    billable_minutes = None
    if payload.billable_time:
        try:
            billable_minutes = parse_duration(payload.billable_time)
        except MalformedDuration as e:
            raise MalformedDuration(f"Invalid billable time format: {e.message}") from e

    # fail on the missing field before the draft rejects it as a shape error
    validate_time_entry(payload.service_id, payload.note, payload.task_id, minutes)
    return TimeEntryDraft(
        date=entry_date,
        minutes=minutes,
        billable_minutes=billable_minutes,
        person_id=person_id,
        service_id=payload.service_id,
        task_id=payload.task_id or None,
        note=payload.note,
        confirmed=payload.confirm,
        person_is_me=payload.person_id == ME,
    )


def render_created(draft: TimeEntryDraft, entry: dict) -> str:
    attributes = entry.get("attributes") or {}
    minutes = attributes.get("time", draft.minutes)
    lines = [
        "Time entry created successfully!",
        f"Date: {attributes.get('date', draft.date)}",
        f"Time: {format_duration(minutes)}",
    ]
    billable = attributes.get("billable_time")
    if billable is not None and billable != minutes:
        lines.append(f"Billable Time: {format_duration(billable)}")
    lines.append(f"ID: {entry.get('id')}")
    if attributes.get("note"):
        lines.append(f"Note: {attributes['note']}")
    lines.append(f"Person ID: {draft.person_id}{' (me)' if draft.person_is_me else ''}")
    lines.append(f"Service ID: {draft.service_id}")
    if draft.task_id:
        lines.append(f"Task ID: {draft.task_id}")
    if attributes.get("created_at"):
        lines.append(f"Created at: {attributes['created_at']}")
    return "\n".join(lines)


async def create_time_entry(gateway: ProductiveClient, payload: CreateTimeEntryPayload, settings: Settings, today: date) -> dict:
    draft = build_time_entry_draft(payload, settings, today)

    async def commit(d: TimeEntryDraft) -> dict:
        response = await gateway.create_time_entry(d.productive_body())
        return response.get("data") or {}

    result = await gate(draft, commit)
    summary = {
        "date": draft.date,
        "minutes": draft.minutes,
        "billable_minutes": draft.billable_minutes,
        "person_id": draft.person_id,
        "service_id": draft.service_id,
        "task_id": draft.task_id,
    }
    if not result.committed:
        return {
            "status": "preview",
            "confirmed": False,
            "formatted_output": result.text,
            "warnings": result.warnings,
            **summary,
        }

    entry = result.entry
    return {
        "status": "success",
        "confirmed": True,
        "entry_id": entry.get("id"),
        "formatted_output": render_created(draft, entry),
        **summary,
    }


# --- hierarchy steps ----------------------------------------------------------

async def list_projects(gateway: ProductiveClient, query: ListProjectsQuery) -> dict:
    response = await gateway.list_projects(status=query.status, company_id=query.company_id, limit=query.limit)
    projects = [
        {"id": p.get("id"), "name": (p.get("attributes") or {}).get("name"), "company_id": _rel_id(p, "company")}
        for p in response.get("data") or []
    ]
    if not projects:
        return {"status": "success", "formatted_output": "No projects found matching the criteria.", "projects": []}

    count = len(projects)
    body = "\n\n".join(
        f"• {p['name']} (ID: {p['id']})" + (f"\n  Company ID: {p['company_id']}" if p["company_id"] else "")
        for p in projects
    )
    text = f"Found {count} {_plural(count, 'project', 'projects')}{_showing(response, count)}:\n\n{body}"
    return {
        "status": "success",
        "formatted_output": text + _next_hint(WorkflowStep.PROJECT),
        "projects": projects,
    }


async def list_project_deals(gateway: ProductiveClient, query: ListProjectDealsQuery) -> dict:
    require_ancestors(WorkflowStep.BUDGET, HierarchyContext(project_id=query.project_id))
    budget_type = int(query.budget_type) if query.budget_type else None
    response = await gateway.list_project_deals(query.project_id, budget_type=budget_type, limit=query.limit)

    deals = []
    for record in response.get("data") or []:
        attributes = record.get("attributes") or {}
        try:
            label = BudgetType(attributes.get("budget_type")).label
        except ValueError:
            label = "Unknown"
        deals.append({"id": record.get("id"), "name": attributes.get("name"), "type": label, "value": attributes.get("value")})

    if not deals:
        return {"status": "success", "formatted_output": "No deals/budgets found for this project.", "deals": []}

    type_filter = {BudgetType.DEAL: "deals", BudgetType.BUDGET: "budgets"}.get(query.budget_type, "deals/budgets")
    body = "\n\n".join(
        f"• {d['type']} (ID: {d['id']})\n  Name: {d['name']}" + (f" (Value: {d['value']})" if d["value"] else "")
        for d in deals
    )
    text = f"Found {len(deals)} {type_filter} for project {query.project_id}:\n\n{body}"
    return {
        "status": "success",
        "formatted_output": text + _next_hint(WorkflowStep.BUDGET),
        "project_id": query.project_id,
        "deals": deals,
    }


async def list_deal_services(gateway: ProductiveClient, query: ListDealServicesQuery) -> dict:
    require_ancestors(WorkflowStep.SERVICE, HierarchyContext(deal_id=query.deal_id))
    response = await gateway.list_deal_services(query.deal_id, limit=query.limit)
    services = [
        {
            "id": s.get("id"),
            "name": (s.get("attributes") or {}).get("name") or "Unnamed Service",
            "description": (s.get("attributes") or {}).get("description"),
        }
        for s in response.get("data") or []
    ]
    if not services:
        return {"status": "success", "formatted_output": "No services found for this deal/budget.", "services": []}

    count = len(services)
    body = "\n\n".join(
        f"• Service (ID: {s['id']})\n  Name: {s['name']}\n  "
        + (f"Description: {s['description']}" if s["description"] else "No description")
        for s in services
    )
    text = f"Found {count} {_plural(count, 'service', 'services')} for deal/budget {query.deal_id}:\n\n{body}"
    return {
        "status": "success",
        "formatted_output": text + _next_hint(WorkflowStep.SERVICE),
        "deal_id": query.deal_id,
        "services": services,
    }


async def list_project_tasks(gateway: ProductiveClient, query: ListProjectTasksQuery, settings: Settings) -> dict:
    require_ancestors(WorkflowStep.TASK, HierarchyContext(project_id=query.project_id))
    assignee_id = resolve_actor(query.assignee_id, settings.user_id)
    response = await gateway.list_tasks(
        project_id=query.project_id, assignee_id=assignee_id, status=query.status, limit=query.limit
    )
    tasks = []
    for record in response.get("data") or []:
        attributes = record.get("attributes") or {}
        tasks.append({
            "id": record.get("id"),
            "title": attributes.get("title"),
            "closed": bool(attributes.get("closed")),
            "assignee_id": _rel_id(record, "assignee"),
        })
    if not tasks:
        return {
            "status": "success",
            "formatted_output": f"No tasks found for project {query.project_id}." + _next_hint(WorkflowStep.TASK),
            "tasks": [],
        }

    count = len(tasks)
    body = "\n\n".join(
        f"• {t['title']} (ID: {t['id']})\n  Status: {'closed' if t['closed'] else 'open'}"
        + (f"\n  Assignee ID: {t['assignee_id']}" if t["assignee_id"] else "")
        for t in tasks
    )
    text = f"Found {count} {_plural(count, 'task', 'tasks')} for project {query.project_id}{_showing(response, count)}:\n\n{body}"
    return {
        "status": "success",
        "formatted_output": text + _next_hint(WorkflowStep.TASK),
        "project_id": query.project_id,
        "tasks": tasks,
    }


async def whoami(gateway: ProductiveClient, settings: Settings) -> dict:
    if not settings.user_id:
        return {
            "status": "success",
            "user_id": None,
            "formatted_output": "No user is configured. Set PRODUCTIVE_USER_ID environment variable to enable user context.",
        }

    try:
        response = await gateway.get_person(settings.user_id)
    except UpstreamRejected as e:
        logger.warning("Could not load person %s: %s", settings.user_id, e.message)
        response = {}

    attributes = (response.get("data") or {}).get("attributes") or {}
    name = f"{attributes.get('first_name', '')} {attributes.get('last_name', '')}".strip()
    if name:
        text = (
            f"Current user: {name} (ID: {settings.user_id}, Email: {attributes.get('email', '')})\n\n"
            'When you use "me" in any command, it refers to this user.'
        )
    else:
        text = f'Current user ID: {settings.user_id}\n\nWhen you use "me" in any command, it refers to this user ID.'
    return {"status": "success", "user_id": settings.user_id, "name": name or None, "formatted_output": text}


# --- guided prompts -----------------------------------------------------------

def _prompt(description: str, text: str, **extra) -> dict:
    return {
        "status": "success",
        "description": description,
        "messages": [{"role": "user", "content": {"type": "text", "text": text}}],
        "formatted_output": text,
        **extra,
    }


def timesheet_entry_prompt(args: TimesheetEntryPromptArgs, today: date) -> dict:
    """Full five-step walkthrough, with any values the user already gave."""
    known = []
    if args.project_name:
        known.append(f"- Project: {args.project_name}")
    if args.date:
        known.append(f"- Date: {parse_date(args.date, today)}")
    if args.time:
        minutes = parse_duration(args.time)
        known.append(f"- Time: {format_duration(minutes)} ({minutes} minutes)")
    if args.work_description:
        known.append(f"- Work description: {args.work_description}")

    lines = ["I want to log time in Productive.", ""]
    if known:
        lines += ["Details so far:", *known, ""]
    lines.append("Follow the timesheet hierarchy in order: Project → Deal/Budget → Service → Task → Time Entry.")
    lines.append("")
    for step in STEP_ORDER:
        lines.append(f"{step_number(step)}. {STEP_TITLES[step]} - {STEP_TOOLS[step]}")
        lines.append(f"   {advise(step, _complete_context()).instruction}")
    lines += [
        "",
        "Rules:",
        "- Every time entry must reference a service from the chosen deal/budget.",
        "- Linking a task is optional but recommended.",
        "- The note must describe the work in at least 10 characters.",
        '- Dates accept "today", "yesterday" or YYYY-MM-DD; time accepts "2h", "120m" or "2.5".',
        '- Use "me" as person_id to log time for the configured user.',
        '- create_time_entry returns a preview first; confirm with "confirm": true only after the user agrees.',
    ]
    if args.project_name:
        lines += ["", f'Start by calling list_projects and find "{args.project_name}".']
    return _prompt("Guided workflow for creating a timesheet entry", "\n".join(lines), next_tool=STEP_TOOLS[WorkflowStep.PROJECT])


def _complete_context() -> HierarchyContext:
    # every id present, so advise() never redirects
    return HierarchyContext(project_id="<project_id>", deal_id="<deal_id>", service_id="<service_id>")


def timesheet_step_prompt(args: TimesheetStepPromptArgs) -> dict:
    context = args.context()
    advice = advise(args.step, context)

    lines = []
    if advice.redirected_from is not None:
        lines.append(
            f"Cannot do step {step_number(args.step)} ({STEP_TITLES[args.step]}) yet: "
            f"missing {', '.join(advice.missing)}."
        )
        lines.append("")
    lines.append(f"Step {advice.number} of {len(STEP_ORDER)}: {advice.title}")
    lines.append(advice.instruction)
    lines.append("")
    lines.append(f"Next tool call: {advice.tool} {json.dumps(advice.arguments)}")
    lines.append(f"This step produces: {advice.produces}")

    selected = {k: v for k, v in context.model_dump().items() if v}
    if selected:
        lines.append("")
        lines.append("Selected so far: " + ", ".join(f"{k}={v}" for k, v in selected.items()))
    if advice.step is WorkflowStep.TASK:
        lines.append("")
        lines.append("Task selection is optional - you may go straight to create_time_entry.")

    return _prompt(
        f"Timesheet step {advice.number}: {advice.title}",
        "\n".join(lines),
        step=advice.step.value,
        next_tool=advice.tool,
        arguments=advice.arguments,
    )
