"""Client for the Productive.io JSON:API."""
import logging

import httpx

from .config import Settings
from .errors import NotConfigured, UpstreamRejected

logger = logging.getLogger(__name__)


def _query(filters: dict | None = None, limit: int | None = None, page: int | None = None, include: str | None = None) -> dict:
    params = {}
    if include:
        params["include"] = include
    for name, value in (filters or {}).items():
        if value is not None and value != "":
            params[f"filter[{name}]"] = str(value)
    if limit:
        params["page[size]"] = str(limit)
    if page:
        params["page[number]"] = str(page)
    return params


def _error_detail(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors and isinstance(errors, list):
        first = errors[0]
        if isinstance(first, dict):
            if first.get("detail"):
                return str(first["detail"])
        elif first:
            return str(first)
    return f"API request failed with status {r.status_code}"


class ProductiveClient:
    """Thin async wrapper; one HTTP round trip per call, no retries."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None, timeout: float = 30):
        self.settings = settings
        self.transport = transport
        self.timeout = timeout

    async def _request(self, method: str, path: str, params: dict | None = None, json: dict | None = None) -> dict:
        if not self.settings.api_token:
            raise NotConfigured("PRODUCTIVE_API_TOKEN not set")
        if not self.settings.org_id:
            raise NotConfigured("PRODUCTIVE_ORG_ID not set")

        async with httpx.AsyncClient(
            base_url=self.settings.base_url,
            headers=self.settings.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                r = await client.request(method, path, params=params, json=json)
            except httpx.RequestError as e:
                raise UpstreamRejected(f"Request to Productive failed: {e}") from e

        logger.debug("%s %s -> %s", method, path, r.status_code)
        if not r.is_success:
            detail = _error_detail(r)
            logger.warning("Productive rejected %s %s (%s): %s", method, path, r.status_code, detail)
            raise UpstreamRejected(detail, r.status_code)
        if not r.content.strip():
            return {}
        try:
            data = r.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Productive sent an unreadable body for %s %s (%s)", method, path, r.status_code)
            raise UpstreamRejected(
                f"Productive returned a non-JSON response (status {r.status_code}); "
                "the request may have been applied, check before retrying"
            )
        return data

    async def list_projects(self, status: str | None = None, company_id: str | None = None, limit: int | None = None, page: int | None = None) -> dict:
        # active = 1, archived = 2
        status_value = {"active": 1, "archived": 2}.get(status) if status else None
        params = _query({"status": status_value, "company_id": company_id}, limit, page)
        return await self._request("GET", "projects", params=params)

    async def list_project_deals(self, project_id: str, budget_type: int | None = None, limit: int | None = None, page: int | None = None) -> dict:
        params = _query({"project_id": project_id, "budget_type": budget_type}, limit, page, include="project")
        return await self._request("GET", "deals", params=params)

    async def list_deal_services(self, deal_id: str, limit: int | None = None, page: int | None = None) -> dict:
        params = _query({"deal_id": deal_id}, limit, page)
        return await self._request("GET", "services", params=params)

    async def list_tasks(self, project_id: str | None = None, assignee_id: str | None = None, status: str | None = None, limit: int | None = None, page: int | None = None) -> dict:
        # open = 1, closed = 2
        status_value = {"open": 1, "closed": 2}.get(status) if status else None
        params = _query({"project_id": project_id, "assignee_id": assignee_id, "status": status_value}, limit, page)
        return await self._request("GET", "tasks", params=params)

    async def list_time_entries(
        self,
        date: str | None = None,
        after: str | None = None,
        before: str | None = None,
        person_id: str | None = None,
        project_id: str | None = None,
        task_id: str | None = None,
        service_id: str | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> dict:
        filters = {
            "date": date,
            "after": after,
            "before": before,
            "person_id": person_id,
            "project_id": project_id,
            "task_id": task_id,
            "service_id": service_id,
        }
        params = _query(filters, limit, page, include="person,service,task")
        return await self._request("GET", "time_entries", params=params)

    async def create_time_entry(self, body: dict) -> dict:
        logger.debug("Creating time entry with data: %s", body)
        return await self._request("POST", "time_entries", json=body)

    async def list_people(self, project_id: str | None = None, email: str | None = None, limit: int | None = None, page: int | None = None) -> dict:
        params = _query({"project_id": project_id, "email": email}, limit, page)
        return await self._request("GET", "people", params=params)

    async def get_person(self, person_id: str) -> dict:
        return await self._request("GET", f"people/{person_id}")
