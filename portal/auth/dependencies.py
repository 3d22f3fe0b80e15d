from fastapi import Depends, Request

from portal.auth import jwt_handler
from portal.auth.principal import Authenticated, Guest, Principal, resolve_or_null
from portal.auth.sessions import SessionState, SessionStore, session_store
from portal.core import config
from portal.errors import Forbidden, Unauthenticated


def get_session_store() -> SessionStore:
    return session_store


def get_session_state(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> SessionState:
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    session_id = jwt_handler.decode_session_token(token) if token else None
    return SessionState.load(store, session_id)


def get_principal(state: SessionState = Depends(get_session_state)) -> Principal | None:
    return resolve_or_null(state)


def require_established(principal: Principal | None) -> Principal:
    if isinstance(principal, (Authenticated, Guest)):
        return principal
    raise Unauthenticated()


def require_admin(principal: Principal | None) -> Authenticated:
    if isinstance(principal, Authenticated) and principal.is_admin:
        return principal
    raise Forbidden()


def get_established_principal(principal: Principal | None = Depends(get_principal)) -> Principal:
    return require_established(principal)


def get_admin_principal(principal: Principal | None = Depends(get_principal)) -> Authenticated:
    return require_admin(principal)
