"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from productive_mcp.config import Settings, get_settings
from productive_mcp.dependencies import get_gateway, get_today
from productive_mcp.main import create_app

TODAY = date(2025, 3, 1)


class FakeGateway:
    """Stands in for ProductiveClient and records every call."""

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.created = []

    def _record(self, name, **kwargs):
        self.calls.append((name, kwargs))
        return self.responses.get(name, {"data": []})

    async def list_projects(self, **kwargs):
        return self._record("list_projects", **kwargs)

    async def list_project_deals(self, project_id, **kwargs):
        return self._record("list_project_deals", project_id=project_id, **kwargs)

    async def list_deal_services(self, deal_id, **kwargs):
        return self._record("list_deal_services", deal_id=deal_id, **kwargs)

    async def list_tasks(self, **kwargs):
        return self._record("list_tasks", **kwargs)

    async def list_time_entries(self, **kwargs):
        return self._record("list_time_entries", **kwargs)

    async def get_person(self, person_id):
        return self._record("get_person", person_id=person_id)

    async def create_time_entry(self, body):
        self.created.append(body)
        self.calls.append(("create_time_entry", {"body": body}))
        return self.responses.get(
            "create_time_entry",
            {"data": {"id": "9001", "type": "time_entries", "attributes": body["data"]["attributes"]}},
        )


@pytest.fixture
def settings():
    return Settings(api_token="token", org_id="org", user_id="42")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(settings, gateway):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as test_client:
        yield test_client
