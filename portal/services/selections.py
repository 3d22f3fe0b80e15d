"""Dashboard selections and their per-category reconciliation.

A submitted selection only ever replaces the principal's memberships inside
one category. Requested ids are checked against the active tools of that
category at call time; anything else is dropped without error so stale forms
referencing deactivated or deleted tools still submit cleanly.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.auth.principal import Authenticated, Guest, Principal, guest_selections, replace_guest_category
from portal.auth.sessions import SessionState
from portal.core.categories import Category, parse_category
from portal.errors import InvalidCategory
from portal.models.selection import Selection
from portal.models.tool import Tool


@dataclass
class CategoryDashboard:
    category: Category
    tools: list[Tool]
    selected: list[Tool]


def coerce_tool_id(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or '_' in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def active_tool_ids(db: Session, category: Category) -> list[int]:
    rows = db.query(Tool.id).filter(
        Tool.category == category.value,
        Tool.is_active.is_(True),
    ).order_by(Tool.name.asc(), Tool.id.asc()).all()
    return [tool_id for (tool_id,) in rows]


def filter_requested_ids(requested_tool_ids: Iterable, valid_ids: Iterable[int]) -> list[int]:
    valid_set = set(valid_ids)
    selected: list[int] = []
    for value in requested_tool_ids:
        tool_id = coerce_tool_id(value)
        if tool_id is not None and tool_id in valid_set and tool_id not in selected:
            selected.append(tool_id)
    return selected


def reconcile_selection(
    db: Session,
    state: SessionState,
    principal: Principal,
    category: str,
    requested_tool_ids: Iterable,
) -> list[int]:
    parsed_category = parse_category(category)
    if parsed_category is None:
        raise InvalidCategory()

    valid_ids = active_tool_ids(db, parsed_category)
    selected_for_category = filter_requested_ids(requested_tool_ids, valid_ids)

    if isinstance(principal, Authenticated):
        _replace_user_selections(db, principal.id, parsed_category, selected_for_category)
    elif isinstance(principal, Guest):
        _replace_guest_selections(db, state, parsed_category, selected_for_category)
    else:
        raise TypeError(f'Unsupported principal: {principal!r}')

    return selected_for_category


def _replace_user_selections(db: Session, user_id: int, category: Category, tool_ids: list[int]) -> None:
    category_tool_ids = select(Tool.id).where(Tool.category == category.value)
    try:
        db.execute(
            delete(Selection)
            .where(
                Selection.user_id == user_id,
                Selection.tool_id.in_(category_tool_ids),
            )
            .execution_options(synchronize_session=False)
        )
        db.add_all(Selection(user_id=user_id, tool_id=tool_id) for tool_id in tool_ids)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def _replace_guest_selections(
    db: Session,
    state: SessionState,
    category: Category,
    tool_ids: list[int],
) -> None:
    # Every id in the category is dropped, including tools deactivated since they were picked.
    rows = db.query(Tool.id).filter(Tool.category == category.value).all()
    replace_guest_category(state, db, {tool_id for (tool_id,) in rows}, set(tool_ids))


def user_selected_tool_ids(db: Session, user_id: int) -> set[int]:
    rows = db.query(Selection.tool_id).filter(Selection.user_id == user_id).all()
    return {tool_id for (tool_id,) in rows}


def selected_tool_ids(db: Session, state: SessionState, principal: Principal) -> set[int]:
    if isinstance(principal, Authenticated):
        return user_selected_tool_ids(db, principal.id)
    return guest_selections(state, db)


def active_tools_by_category(db: Session) -> dict[Category, list[Tool]]:
    tools = db.query(Tool).filter(
        Tool.is_active.is_(True),
    ).order_by(Tool.category.asc(), Tool.name.asc(), Tool.id.asc()).all()

    grouped: dict[Category, list[Tool]] = {category: [] for category in Category}
    for tool in tools:
        category = parse_category(tool.category)
        if category is not None:
            grouped[category].append(tool)
    return grouped


def dashboard_view(db: Session, state: SessionState, principal: Principal) -> list[CategoryDashboard]:
    grouped = active_tools_by_category(db)
    selected_ids = selected_tool_ids(db, state, principal)

    # Active tools are filtered first, so a deactivated tool stays hidden even while selected.
    return [
        CategoryDashboard(
            category=category,
            tools=tools,
            selected=[tool for tool in tools if tool.id in selected_ids],
        )
        for category, tools in grouped.items()
    ]
