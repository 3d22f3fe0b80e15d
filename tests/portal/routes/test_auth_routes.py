from portal.auth.sessions import MemorySessionStore
from portal.auth.dependencies import get_session_store
from portal.core import config
from portal.main import app
from portal.models.selection import Selection


class _BrokenStore(MemorySessionStore):
    def create(self, data: dict) -> str:
        raise OSError('session store unavailable')


def test_entry_lists_categories_for_anonymous_visitor(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    body = response.json()
    assert [category['key'] for category in body['categories']] == [
        'KNOWLEDGE',
        'LEARNING_SPACE',
        'MY_WORK_SPACE',
        'COMMUNITY',
        'NEW_FUNDS_AND_TALENTS',
    ]
    assert body['categories'][4]['label'] == 'New Funds and Talents'


def test_admin_login_redirects_to_admin(client, make_user, login_as) -> None:
    make_user('admin@example.com', role='admin')

    response = login_as('admin@example.com')

    assert response.headers['location'] == '/admin'
    assert config.SESSION_COOKIE_NAME in response.cookies
    assert client.get('/', follow_redirects=False).headers['location'] == '/admin'


def test_user_login_redirects_to_home(client, make_user, login_as) -> None:
    make_user('user@example.com')

    response = login_as('user@example.com')

    assert response.headers['location'] == '/home'
    assert client.get('/', follow_redirects=False).headers['location'] == '/home'


def test_invalid_login_returns_generic_message(client, make_user) -> None:
    make_user('user@example.com')

    wrong_password = client.post('/login', json={'email': 'user@example.com', 'password': 'nope'})
    unknown_email = client.post('/login', json={'email': 'ghost@example.com', 'password': 'Secret123!'})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {'detail': 'Invalid email or password.'}
    assert config.SESSION_COOKIE_NAME not in wrong_password.cookies


def test_login_issues_new_session_cookie(client, make_user, login_as) -> None:
    make_user('user@example.com')
    guest_cookie = client.post('/guest', follow_redirects=False).cookies[config.SESSION_COOKIE_NAME]

    login_cookie = login_as('user@example.com').cookies[config.SESSION_COOKIE_NAME]

    assert login_cookie != guest_cookie


def test_guest_session_reaches_dashboard(client, make_tool) -> None:
    make_tool('Alpha', 'KNOWLEDGE')

    response = client.post('/guest', follow_redirects=False)

    assert response.status_code == 303
    assert response.headers['location'] == '/home'
    dashboard = client.get('/home')
    assert dashboard.status_code == 200
    assert dashboard.json()['is_guest'] is True


def test_guest_selections_do_not_survive_login(client, db, make_user, make_tool, login_as) -> None:
    user = make_user('user@example.com')
    alpha = make_tool('Alpha', 'KNOWLEDGE')
    beta = make_tool('Beta', 'KNOWLEDGE')
    client.post('/guest')
    client.post('/home/category/KNOWLEDGE/select', json={'tool_ids': [alpha.id, beta.id]})

    login_as('user@example.com')
    dashboard = client.get('/home').json()

    knowledge = next(entry for entry in dashboard['categories'] if entry['key'] == 'KNOWLEDGE')
    assert dashboard['is_guest'] is False
    assert knowledge['selected'] == []
    assert db.query(Selection).filter(Selection.user_id == user.id).count() == 0


def test_logout_clears_session(client, make_user, login_as) -> None:
    make_user('user@example.com')
    login_as('user@example.com')

    response = client.post('/logout', follow_redirects=False)

    assert response.status_code == 303
    assert response.headers['location'] == '/'
    assert client.get('/home', follow_redirects=False).headers['location'] == '/'


def test_logout_without_session_is_harmless(client) -> None:
    response = client.post('/logout', follow_redirects=False)

    assert response.status_code == 303
    assert response.headers['location'] == '/'


def test_tampered_cookie_is_treated_as_anonymous(client) -> None:
    client.cookies.set(config.SESSION_COOKIE_NAME, 'forged-token')

    response = client.get('/home', follow_redirects=False)

    assert response.status_code == 303
    assert response.headers['location'] == '/'


def test_guest_start_reports_session_error(client) -> None:
    app.dependency_overrides[get_session_store] = lambda: _BrokenStore()

    response = client.post('/guest', follow_redirects=False)

    assert response.status_code == 500
    assert response.json() == {'detail': 'Session error. Please try again.'}
    assert config.SESSION_COOKIE_NAME not in response.cookies


def test_unknown_route_returns_not_found_page(client) -> None:
    response = client.get('/nowhere')

    assert response.status_code == 404
    assert response.json() == {'detail': 'Page not found.'}
