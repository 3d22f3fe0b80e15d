import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('SEED_DEMO_DATA', 'false')

from portal.auth.passwords import hash_password  # noqa: E402
from portal.auth.sessions import MemorySessionStore, SessionState  # noqa: E402
from portal.database import Base  # noqa: E402
from portal.models.selection import Selection  # noqa: E402
from portal.models.tool import Tool  # noqa: E402
from portal.models.user import User  # noqa: E402

TABLES = [User.__table__, Tool.__table__, Selection.__table__]


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=TABLES)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def session_state(store):
    return SessionState(store)


@pytest.fixture
def make_user(db):
    def _make_user(email: str, password: str = 'Secret123!', role: str = 'user', name: str = 'Test User') -> User:
        user = User(name=name, email=email, password_hash=hash_password(password), role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_tool(db):
    def _make_tool(name: str, category: str = 'KNOWLEDGE', is_active: bool = True, icon: str | None = None) -> Tool:
        tool = Tool(
            name=name,
            category=category,
            url=f'https://{name.lower().replace(" ", "-")}.example.com',
            description=f'{name} description.',
            icon=icon,
            is_active=is_active,
        )
        db.add(tool)
        db.commit()
        db.refresh(tool)
        return tool

    return _make_tool
