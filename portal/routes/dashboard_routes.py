from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from portal.auth.dependencies import get_established_principal, get_session_state
from portal.auth.principal import Guest, Principal
from portal.auth.sessions import SessionState
from portal.database import get_db
from portal.services.selections import dashboard_view, reconcile_selection

router = APIRouter(tags=['dashboard'])


class ToolResponse(BaseModel):
    id: int
    name: str
    category: str
    url: str
    description: str
    icon: str | None = None

    class Config:
        from_attributes = True


class CategoryDashboardResponse(BaseModel):
    key: str
    label: str
    tools: list[ToolResponse]
    selected: list[ToolResponse]


class DashboardResponse(BaseModel):
    is_guest: bool
    categories: list[CategoryDashboardResponse]


class SelectToolsRequest(BaseModel):
    tool_ids: list[Any] = Field(default_factory=list)

    @field_validator('tool_ids', mode='before')
    @classmethod
    def wrap_single_tool_id(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]


@router.get('/home', response_model=DashboardResponse)
def view_dashboard(
    principal: Principal = Depends(get_established_principal),
    state: SessionState = Depends(get_session_state),
    db: Session = Depends(get_db),
):
    categories = dashboard_view(db, state, principal)

    return DashboardResponse(
        is_guest=isinstance(principal, Guest),
        categories=[
            CategoryDashboardResponse(
                key=entry.category.value,
                label=entry.category.label,
                tools=[ToolResponse.model_validate(tool) for tool in entry.tools],
                selected=[ToolResponse.model_validate(tool) for tool in entry.selected],
            )
            for entry in categories
        ],
    )


@router.post('/home/category/{category}/select')
def set_category_selection(
    category: str,
    data: SelectToolsRequest,
    principal: Principal = Depends(get_established_principal),
    state: SessionState = Depends(get_session_state),
    db: Session = Depends(get_db),
):
    reconcile_selection(db, state, principal, category, data.tool_ids)
    return RedirectResponse(url='/home', status_code=status.HTTP_303_SEE_OTHER)
