from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from portal.auth import jwt_handler
from portal.auth.dependencies import get_principal, get_session_state
from portal.auth.principal import Authenticated, Guest, Principal, login, logout, start_guest
from portal.auth.sessions import SessionState
from portal.core import config
from portal.core.categories import Category
from portal.database import get_db

router = APIRouter(tags=['auth'])


class LoginRequest(BaseModel):
    email: str = ''
    password: str = ''


class CategoryOptionResponse(BaseModel):
    key: str
    label: str


class EntryResponse(BaseModel):
    message: str
    categories: list[CategoryOptionResponse]


def landing_path(principal: Principal) -> str:
    if isinstance(principal, Authenticated) and principal.is_admin:
        return '/admin'
    return '/home'


def redirect_with_session(url: str, state: SessionState) -> RedirectResponse:
    response = RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=jwt_handler.create_session_token(state.session_id),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite='lax',
        max_age=config.SESSION_EXPIRES_MINUTES * 60,
        path='/',
    )
    return response


@router.get('/', response_model=EntryResponse)
def entry(principal: Principal | None = Depends(get_principal)):
    if isinstance(principal, (Authenticated, Guest)):
        return RedirectResponse(url=landing_path(principal), status_code=status.HTTP_303_SEE_OTHER)

    return EntryResponse(
        message='Sign in or continue as a guest.',
        categories=[CategoryOptionResponse(key=category.value, label=category.label) for category in Category],
    )


@router.post('/login')
def login_user(
    data: LoginRequest,
    state: SessionState = Depends(get_session_state),
    db: Session = Depends(get_db),
):
    principal = login(state, db, data.email, data.password)
    return redirect_with_session(landing_path(principal), state)


@router.post('/guest')
def continue_as_guest(state: SessionState = Depends(get_session_state)):
    start_guest(state)
    return redirect_with_session('/home', state)


@router.post('/logout')
def logout_user(state: SessionState = Depends(get_session_state)):
    logout(state)
    response = RedirectResponse(url='/', status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(config.SESSION_COOKIE_NAME, path='/')
    return response
