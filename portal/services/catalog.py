"""Admin management of the tool catalog."""

from dataclasses import dataclass

from pydantic import BaseModel
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.core.categories import Category, parse_category
from portal.errors import InvalidCategory, InvalidInput, NotFound
from portal.models.selection import Selection
from portal.models.tool import Tool

REQUIRED_TOOL_FIELDS = ('name', 'category', 'url', 'description')


class ToolForm(BaseModel):
    """Raw admin form values, kept as submitted so they can be echoed back."""
    name: str | None = None
    category: str | None = None
    url: str | None = None
    description: str | None = None
    icon: str | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class ToolInput:
    name: str
    category: Category
    url: str
    description: str
    icon: str | None


def _clean(value: str | None) -> str:
    return value.strip() if value else ''


def validate_tool_form(form: ToolForm) -> ToolInput:
    values = {field: _clean(getattr(form, field)) for field in REQUIRED_TOOL_FIELDS}
    missing = [field for field in REQUIRED_TOOL_FIELDS if not values[field]]

    category = parse_category(values['category'])
    if values['category'] and category is None:
        missing.append('category')

    if missing:
        raise InvalidInput(fields=missing)

    return ToolInput(
        name=values['name'],
        category=category,
        url=values['url'],
        description=values['description'],
        icon=_clean(form.icon) or None,
    )


def list_catalog(db: Session, category: str | None = None) -> list[Tool]:
    if category:
        parsed_category = parse_category(category)
        if parsed_category is None:
            raise InvalidCategory()
        return db.query(Tool).filter(
            Tool.category == parsed_category.value,
        ).order_by(Tool.is_active.desc(), Tool.name.asc(), Tool.id.asc()).all()

    return db.query(Tool).order_by(
        Tool.category.asc(),
        Tool.is_active.desc(),
        Tool.name.asc(),
        Tool.id.asc(),
    ).all()


def create_tool(db: Session, form: ToolForm) -> int:
    data = validate_tool_form(form)

    tool = Tool(
        name=data.name,
        category=data.category.value,
        url=data.url,
        description=data.description,
        icon=data.icon,
        is_active=True,
    )
    try:
        db.add(tool)
        db.commit()
        db.refresh(tool)
    except SQLAlchemyError:
        db.rollback()
        raise

    return tool.id


def update_tool(db: Session, tool_id: int, form: ToolForm) -> None:
    data = validate_tool_form(form)

    tool = db.query(Tool).filter(Tool.id == tool_id).first()
    if tool is None:
        raise NotFound()

    tool.name = data.name
    tool.category = data.category.value
    tool.url = data.url
    tool.description = data.description
    tool.icon = data.icon
    if form.is_active is not None:
        tool.is_active = form.is_active

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def delete_tool(db: Session, tool_id: int) -> None:
    try:
        db.execute(
            delete(Selection)
            .where(Selection.tool_id == tool_id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Tool)
            .where(Tool.id == tool_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
