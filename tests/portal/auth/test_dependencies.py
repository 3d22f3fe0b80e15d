import pytest

from portal.auth.dependencies import require_admin, require_established
from portal.auth.principal import Authenticated, Guest
from portal.errors import Forbidden, Unauthenticated

ADMIN = Authenticated(id=1, name='Admin User', email='admin@example.com', role='admin')
USER = Authenticated(id=2, name='Regular User', email='user@example.com', role='user')


@pytest.mark.parametrize('principal', [ADMIN, USER, Guest(), Guest(selections=(1, 2))])
def test_require_established_accepts_users_and_guests(principal) -> None:
    assert require_established(principal) is principal


def test_require_established_rejects_missing_principal() -> None:
    with pytest.raises(Unauthenticated):
        require_established(None)


def test_require_admin_accepts_admin() -> None:
    assert require_admin(ADMIN) is ADMIN


@pytest.mark.parametrize('principal', [None, USER, Guest()])
def test_require_admin_rejects_everyone_else(principal) -> None:
    with pytest.raises(Forbidden) as exception_info:
        require_admin(principal)

    assert exception_info.value.status_code == 403
