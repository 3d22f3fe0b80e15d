import pytest
from fastapi.testclient import TestClient

from portal.auth.dependencies import get_session_store
from portal.database import get_db
from portal.main import app


@pytest.fixture
def client(session_factory, store):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login_as(client):
    def _login_as(email: str, password: str = 'Secret123!'):
        response = client.post('/login', json={'email': email, 'password': password}, follow_redirects=False)
        assert response.status_code == 303
        return response

    return _login_as
