import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portal.auth.dependencies import get_admin_principal
from portal.auth.principal import Authenticated
from portal.database import get_db
from portal.errors import InvalidInput
from portal.services.catalog import ToolForm, create_tool, delete_tool, list_catalog, update_tool

logger = logging.getLogger(__name__)

router = APIRouter(tags=['admin'])

UPDATE_INPUT_ERROR = 'Invalid input for tool update.'


class AdminToolResponse(BaseModel):
    id: int
    name: str
    category: str
    url: str
    description: str
    icon: str | None = None
    is_active: bool

    class Config:
        from_attributes = True


class CatalogResponse(BaseModel):
    tools: list[AdminToolResponse]
    filter_category: str | None = None
    error: str | None = None
    invalid_fields: list[str] = []
    form_data: ToolForm | None = None


@router.get('/admin', response_model=CatalogResponse)
def list_tools(
    category: str | None = Query(default=None),
    admin: Authenticated = Depends(get_admin_principal),
    db: Session = Depends(get_db),
):
    tools = list_catalog(db, category)
    return CatalogResponse(
        tools=[AdminToolResponse.model_validate(tool) for tool in tools],
        filter_category=category,
    )


@router.post('/admin/tools')
def add_tool(
    data: ToolForm,
    admin: Authenticated = Depends(get_admin_principal),
    db: Session = Depends(get_db),
):
    try:
        tool_id = create_tool(db, data)
    except InvalidInput as exc:
        tools = list_catalog(db)
        echo = CatalogResponse(
            tools=[AdminToolResponse.model_validate(tool) for tool in tools],
            error=exc.message,
            invalid_fields=exc.fields,
            form_data=data,
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=echo.model_dump(mode='json'))

    logger.info('Admin %s created tool %s.', admin.email, tool_id)
    return RedirectResponse(url='/admin', status_code=status.HTTP_303_SEE_OTHER)


@router.post('/admin/tools/{tool_id}/update')
def edit_tool(
    tool_id: int,
    data: ToolForm,
    admin: Authenticated = Depends(get_admin_principal),
    db: Session = Depends(get_db),
):
    try:
        update_tool(db, tool_id, data)
    except InvalidInput as exc:
        raise InvalidInput(fields=exc.fields, message=UPDATE_INPUT_ERROR) from exc

    logger.info('Admin %s updated tool %s.', admin.email, tool_id)
    return RedirectResponse(url='/admin', status_code=status.HTTP_303_SEE_OTHER)


@router.post('/admin/tools/{tool_id}/delete')
def remove_tool(
    tool_id: int,
    admin: Authenticated = Depends(get_admin_principal),
    db: Session = Depends(get_db),
):
    delete_tool(db, tool_id)
    logger.info('Admin %s deleted tool %s.', admin.email, tool_id)
    return RedirectResponse(url='/admin', status_code=status.HTTP_303_SEE_OTHER)
