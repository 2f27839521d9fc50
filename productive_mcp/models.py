"""Request payloads for the exposed tools and prompts."""
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, Field

from .workflow import BudgetType, HierarchyContext, WorkflowStep

Limit = Annotated[int, Field(ge=1, le=200)]


class ListTimeEntriesQuery(BaseModel):
    date: Optional[str] = None
    after: Optional[str] = None
    before: Optional[str] = None
    person_id: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    service_id: Optional[str] = None
    limit: Limit = 30


class CreateTimeEntryPayload(BaseModel):
    date: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    person_id: str = Field(..., min_length=1)
    # service and note are checked by the workflow rules, not the schema,
    # so a missing one is reported as MissingRequiredField
    service_id: Optional[str] = None
    task_id: Optional[str] = None
    note: Optional[str] = None
    billable_time: Optional[str] = None
    confirm: bool = False


class ListProjectDealsQuery(BaseModel):
    project_id: Optional[str] = None
    budget_type: Optional[BudgetType] = None
    limit: Limit = 30


class ListDealServicesQuery(BaseModel):
    deal_id: Optional[str] = None
    limit: Limit = 30


class ListProjectsQuery(BaseModel):
    status: Optional[Literal["active", "archived"]] = None
    company_id: Optional[str] = None
    limit: Limit = 30


class ListProjectTasksQuery(BaseModel):
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None
    status: Optional[Literal["open", "closed"]] = None
    limit: Limit = 30


class TimesheetEntryPromptArgs(BaseModel):
    project_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    work_description: Optional[str] = None


class TimesheetStepPromptArgs(BaseModel):
    step: WorkflowStep
    project_id: Optional[str] = None
    deal_id: Optional[str] = None
    service_id: Optional[str] = None
    task_id: Optional[str] = None

    def context(self) -> HierarchyContext:
        return HierarchyContext(
            project_id=self.project_id,
            deal_id=self.deal_id,
            service_id=self.service_id,
            task_id=self.task_id,
        )
