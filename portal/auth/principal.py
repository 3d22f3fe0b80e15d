"""Identity resolution for a request's session.

A session holds at most one principal in its ``principal`` slot: either an
authenticated user or a guest. Transitions between the two always regenerate
the session id and replace the slot wholesale.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from portal.auth import passwords
from portal.auth.sessions import SessionState
from portal.core.categories import CATEGORY_KEYS
from portal.errors import InvalidCredentials
from portal.models.tool import Tool
from portal.models.user import User

logger = logging.getLogger(__name__)

PRINCIPAL_KEY = 'principal'
AUTHENTICATED_KIND = 'authenticated'
GUEST_KIND = 'guest'


@dataclass(frozen=True)
class Authenticated:
    id: int
    name: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'


@dataclass(frozen=True)
class Guest:
    # None until the first dashboard read fills in the defaults.
    selections: tuple[int, ...] | None = None


Principal = Authenticated | Guest


def resolve_or_null(state: SessionState) -> Principal | None:
    record = state.data.get(PRINCIPAL_KEY)
    if not isinstance(record, dict):
        return None

    kind = record.get('kind')
    if kind == AUTHENTICATED_KIND:
        return Authenticated(
            id=record['id'],
            name=record['name'],
            email=record['email'],
            role=record['role'],
        )
    if kind == GUEST_KIND:
        selections = record.get('selections')
        return Guest(selections=tuple(selections) if selections is not None else None)
    return None


def login(state: SessionState, db: Session, email: str, password: str) -> Authenticated:
    user = db.query(User).filter(User.email == email).first()

    if user is None:
        passwords.burn_verification(password)
        logger.info('Rejected login attempt.')
        raise InvalidCredentials()
    if not passwords.verify_password(password, user.password_hash):
        logger.info('Rejected login attempt.')
        raise InvalidCredentials()

    principal = Authenticated(id=user.id, name=user.name, email=user.email, role=user.role)
    state.regenerate({
        PRINCIPAL_KEY: {
            'kind': AUTHENTICATED_KIND,
            'id': principal.id,
            'name': principal.name,
            'email': principal.email,
            'role': principal.role,
        },
    })
    return principal


def start_guest(state: SessionState) -> Guest:
    state.regenerate({PRINCIPAL_KEY: {'kind': GUEST_KIND, 'selections': None}})
    return Guest()


def logout(state: SessionState) -> None:
    state.destroy()


def first_active_tool_per_category(db: Session) -> list[int]:
    """First active tool of each category, by name."""
    tools = db.query(Tool.id, Tool.category).filter(
        Tool.is_active.is_(True),
    ).order_by(Tool.category.asc(), Tool.name.asc(), Tool.id.asc()).all()

    first_per_category: dict[str, int] = {}
    for tool_id, category in tools:
        first_per_category.setdefault(category, tool_id)

    return [first_per_category[key] for key in CATEGORY_KEYS if key in first_per_category]


def _guest_record(data: dict) -> dict | None:
    record = data.get(PRINCIPAL_KEY)
    if isinstance(record, dict) and record.get('kind') == GUEST_KIND:
        return record
    return None


def guest_selections(state: SessionState, db: Session) -> set[int]:
    record = _guest_record(state.data)
    if record is None:
        raise ValueError('Session does not hold a guest principal.')

    if record.get('selections') is not None:
        return set(record['selections'])

    defaults = first_active_tool_per_category(db)

    def fill_defaults(data: dict) -> None:
        stored = _guest_record(data)
        if stored is not None and stored.get('selections') is None:
            stored['selections'] = defaults

    if not state.update(fill_defaults):
        return set(defaults)

    record = _guest_record(state.data)
    if record is None or record.get('selections') is None:
        return set(defaults)
    return set(record['selections'])


def replace_guest_category(
    state: SessionState,
    db: Session,
    category_tool_ids: set[int],
    selected_ids: set[int],
) -> bool:
    """Swap one category's ids in the stored guest selections.

    The delta is applied to whatever the store holds at write time, so a
    concurrent reconcile of another category on the same session is kept.
    Returns False if the session ended before the write.
    """
    record = _guest_record(state.data)
    if record is None:
        raise ValueError('Session does not hold a guest principal.')

    defaults = first_active_tool_per_category(db) if record.get('selections') is None else []

    def apply_delta(data: dict) -> None:
        stored = _guest_record(data)
        if stored is None:
            return
        current = stored.get('selections')
        if current is None:
            current = defaults
        stored['selections'] = sorted((set(current) - category_tool_ids) | selected_ids)

    return state.update(apply_delta)
