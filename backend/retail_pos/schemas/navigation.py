from pydantic import BaseModel


class DashboardModule(BaseModel):
    id: str
    title: str
    description: str


class ModuleListResponse(BaseModel):
    dashboard: str
    role: str | None
    role_resolved: bool
    modules: list[DashboardModule]
    should_leave: bool
