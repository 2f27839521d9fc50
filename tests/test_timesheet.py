import asyncio
from datetime import date

import pytest

from productive_mcp import timesheet
from productive_mcp.config import Settings
from productive_mcp.errors import (
    MalformedDate,
    MalformedDuration,
    MissingRequiredField,
    NoActorConfigured,
    UpstreamRejected,
)
from productive_mcp.models import (
    CreateTimeEntryPayload,
    ListDealServicesQuery,
    ListProjectDealsQuery,
    ListProjectTasksQuery,
    ListTimeEntriesQuery,
    TimesheetEntryPromptArgs,
    TimesheetStepPromptArgs,
)

TODAY = date(2025, 3, 1)


def _payload(**overrides):
    values = dict(
        date="today",
        time="2h",
        person_id="me",
        service_id="S1",
        note="Implemented caching layer",
    )
    values.update(overrides)
    return CreateTimeEntryPayload(**values)


def _create(gateway, settings, **overrides):
    return asyncio.run(timesheet.create_time_entry(gateway, _payload(**overrides), settings, TODAY))


def test_create_preview_resolves_and_does_not_write(gateway, settings):
    for _ in range(2):
        res = _create(gateway, settings)
        assert res["status"] == "preview"
        assert res["minutes"] == 120
        assert res["person_id"] == "42"
        assert res["date"] == "2025-03-01"
        assert "Time: 2h" in res["formatted_output"]
        assert "Person ID: 42 (me)" in res["formatted_output"]
    assert gateway.created == []


def test_create_confirmed_writes_once(gateway, settings):
    res = _create(gateway, settings, confirm=True)

    assert len(gateway.created) == 1
    body = gateway.created[0]["data"]
    assert body["attributes"]["time"] == 120
    assert body["attributes"]["date"] == "2025-03-01"
    assert body["relationships"]["person"]["data"]["id"] == "42"
    assert body["relationships"]["service"]["data"]["id"] == "S1"

    assert res["status"] == "success"
    assert res["entry_id"] == "9001"
    assert "ID: 9001" in res["formatted_output"]


def test_create_repeated_confirmed_calls_write_once_each(gateway, settings):
    _create(gateway, settings, confirm=True)
    _create(gateway, settings, confirm=True)
    assert len(gateway.created) == 2


@pytest.mark.parametrize("confirm", [False, True])
def test_short_note_fails_before_network(gateway, settings, confirm):
    with pytest.raises(MissingRequiredField):
        _create(gateway, settings, note="too short", confirm=confirm)
    assert gateway.calls == []


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"service_id": None}, MissingRequiredField),
        ({"time": "2x"}, MalformedDuration),
        ({"billable_time": "lots"}, MalformedDuration),
        ({"date": "2024-13-01"}, MalformedDate),
    ],
)
def test_invalid_input_never_reaches_gateway(gateway, settings, overrides, error):
    with pytest.raises(error):
        _create(gateway, settings, confirm=True, **overrides)
    assert gateway.calls == []


def test_me_without_configured_user(gateway):
    with pytest.raises(NoActorConfigured):
        _create(gateway, Settings(api_token="t", org_id="o"), confirm=True)
    assert gateway.calls == []


def test_missing_task_is_only_a_warning(gateway, settings):
    res = _create(gateway, settings)
    assert any("No task specified" in w for w in res["warnings"])

    res = _create(gateway, settings, task_id="T7")
    assert res["warnings"] == []
    assert "Task ID: T7" in res["formatted_output"]


def test_billable_time_in_body(gateway, settings):
    res = _create(gateway, settings, billable_time="90m", confirm=True)
    assert gateway.created[0]["data"]["attributes"]["billable_time"] == 90
    assert "Billable Time: 1h 30m" in res["formatted_output"]


def test_upstream_rejection_passes_through(gateway, settings):
    async def reject(body):
        raise UpstreamRejected("Service is not linked to this budget", 422)

    gateway.create_time_entry = reject
    with pytest.raises(UpstreamRejected) as exc:
        _create(gateway, settings, confirm=True)
    assert exc.value.message == "Service is not linked to this budget"


def test_list_time_entries_annotates_and_totals(gateway, settings):
    gateway.responses["list_time_entries"] = {
        "data": [
            {
                "id": "1",
                "attributes": {"date": "2025-03-01", "time": 90, "billable_time": 60, "note": "Review"},
                "relationships": {
                    "person": {"data": {"id": "42", "type": "people"}},
                    "service": {"data": {"id": "S1", "type": "services"}},
                },
            },
            {"id": "2", "attributes": {"date": "2025-03-01", "time": 60, "billable_time": 60}},
        ],
        "meta": {"total_count": 7},
    }
    res = asyncio.run(timesheet.list_time_entries(gateway, ListTimeEntriesQuery(person_id="me", date="2025-03-01"), settings))

    name, kwargs = gateway.calls[0]
    assert name == "list_time_entries"
    assert kwargs["person_id"] == "42"
    assert kwargs["date"] == "2025-03-01"
    assert kwargs["limit"] == 30

    assert res["total_minutes"] == 150
    assert res["total_duration"] == "2h 30m"
    assert res["total_count"] == 7
    assert res["entries"][0]["duration"] == "1h 30m"
    assert res["entries"][0]["billable_duration"] == "1h"
    assert res["entries"][1]["billable_duration"] is None
    assert "Found 2 time entries (showing 2 of 7)" in res["formatted_output"]
    assert "Total Time: 2h 30m" in res["formatted_output"]
    assert "Task ID: None" in res["formatted_output"]


def test_list_time_entries_empty(gateway, settings):
    res = asyncio.run(timesheet.list_time_entries(gateway, ListTimeEntriesQuery(), settings))
    assert res["formatted_output"] == "No time entries found matching the criteria."
    assert res["total_duration"] == "0m"


def test_list_project_deals_requires_project(gateway):
    with pytest.raises(MissingRequiredField):
        asyncio.run(timesheet.list_project_deals(gateway, ListProjectDealsQuery()))
    assert gateway.calls == []


def test_list_project_deals_forwards_type(gateway):
    gateway.responses["list_project_deals"] = {
        "data": [
            {"id": "D1", "attributes": {"name": "Retainer", "budget_type": 2, "value": 5000}},
            {"id": "D2", "attributes": {"name": "Pitch", "budget_type": 1}},
        ]
    }
    res = asyncio.run(timesheet.list_project_deals(gateway, ListProjectDealsQuery(project_id="P1", budget_type=2)))
    assert gateway.calls == [("list_project_deals", {"project_id": "P1", "budget_type": 2, "limit": 30})]
    assert [d["type"] for d in res["deals"]] == ["Budget", "Deal"]
    assert res["formatted_output"].startswith("Found 2 budgets for project P1")
    assert "(Value: 5000)" in res["formatted_output"]
    assert "list_deal_services" in res["formatted_output"]


def test_list_deal_services(gateway):
    with pytest.raises(MissingRequiredField):
        asyncio.run(timesheet.list_deal_services(gateway, ListDealServicesQuery()))

    gateway.responses["list_deal_services"] = {"data": [{"id": "S1", "attributes": {"name": "Development"}}]}
    res = asyncio.run(timesheet.list_deal_services(gateway, ListDealServicesQuery(deal_id="D1", limit=5)))
    assert gateway.calls == [("list_deal_services", {"deal_id": "D1", "limit": 5})]
    assert res["services"] == [{"id": "S1", "name": "Development", "description": None}]
    assert "Found 1 service for deal/budget D1" in res["formatted_output"]


def test_list_project_tasks_resolves_assignee(gateway, settings):
    asyncio.run(timesheet.list_project_tasks(gateway, ListProjectTasksQuery(project_id="P1", assignee_id="me"), settings))
    assert gateway.calls[0][1]["assignee_id"] == "42"


def test_whoami(gateway, settings):
    gateway.responses["get_person"] = {"data": {"id": "42", "attributes": {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}}}
    res = asyncio.run(timesheet.whoami(gateway, settings))
    assert res["name"] == "Ada Lovelace"
    assert "Current user: Ada Lovelace (ID: 42" in res["formatted_output"]

    res = asyncio.run(timesheet.whoami(gateway, Settings()))
    assert res["user_id"] is None


def test_whoami_falls_back_to_id(gateway, settings):
    async def reject(person_id):
        raise UpstreamRejected("Not found", 404)

    gateway.get_person = reject
    res = asyncio.run(timesheet.whoami(gateway, settings))
    assert res["formatted_output"].startswith("Current user ID: 42")


def test_timesheet_entry_prompt_normalizes_values():
    res = timesheet.timesheet_entry_prompt(
        TimesheetEntryPromptArgs(project_name="Website", date="yesterday", time="2.5h"), TODAY
    )
    text = res["formatted_output"]
    assert "- Date: 2025-02-28" in text
    assert "- Time: 2h 30m (150 minutes)" in text
    assert "5. Time entry creation - create_time_entry" in text
    assert res["messages"][0]["content"]["text"] == text


def test_timesheet_entry_prompt_rejects_bad_time():
    with pytest.raises(MalformedDuration):
        timesheet.timesheet_entry_prompt(TimesheetEntryPromptArgs(time="soon"), TODAY)


def test_timesheet_step_prompt():
    res = timesheet.timesheet_step_prompt(TimesheetStepPromptArgs(step="budget", project_id="P1"))
    assert res["next_tool"] == "list_project_deals"
    assert res["arguments"] == {"project_id": "P1"}
    assert "Step 2 of 5" in res["formatted_output"]


def test_timesheet_step_prompt_redirects():
    res = timesheet.timesheet_step_prompt(TimesheetStepPromptArgs(step="create", project_id="P1", deal_id="D1"))
    assert res["step"] == "service"
    assert res["next_tool"] == "list_deal_services"
    assert "missing service_id" in res["formatted_output"]
