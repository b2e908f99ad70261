"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.config import Settings, get_settings
from src.database import Base, get_db
from src.main import app
from src.models.enums import UserStatus
from src.models.role import Permission, Role
from src.models.user import User
from src.services.access_seed import seed_administrator, seed_permissions, seed_roles
from src.services.auth import generate_confirmation_code, get_password_hash

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"
USER_PASSWORD = "userpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/user_admin", "/user_admin_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """Session factory bound to the test database, for code that opens its own sessions."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def permanently_delete_enabled(client):
    """Turn on the permanent-delete feature flag for the app."""
    app.dependency_overrides[get_settings] = lambda: Settings(permanently_delete_users=True)
    yield
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def roles(db):
    """Seed permissions plus the Administrator and User roles."""
    seed_permissions(db)
    admin_role, user_role = seed_roles(db)
    db.commit()
    return admin_role, user_role


@pytest.fixture
def admin_user(db, roles):
    """Active administrator holding every permission."""
    user = seed_administrator(db, ADMIN_EMAIL, ADMIN_PASSWORD)
    db.commit()
    return user


@pytest.fixture
def make_user(db, roles):
    """Factory for users with the plain User role."""
    _, user_role = roles

    def _make_user(
        email: str,
        name: str = "Member",
        status: UserStatus = UserStatus.ACTIVE,
        trashed: bool = False,
        extra_roles: list[Role] | None = None,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(USER_PASSWORD),
            status=status.value,
            confirmed=1,
            confirmation_code=generate_confirmation_code(),
        )
        user.attach_roles([user_role, *(extra_roles or [])])
        if trashed:
            user.soft_delete()
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def restorer_role(db, roles):
    """Role holding only the restore-users permission."""
    permission = db.query(Permission).filter(Permission.name == "restore-users").one()
    role = Role(name="Restorer", all=False, sort=3)
    role.permissions.append(permission)
    db.add(role)
    db.commit()
    return role


def _login(client, email: str, password: str) -> AuthHeaders:
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"}, user_id=data["user"]["id"]
    )


@pytest.fixture
def auth_headers(client, admin_user):
    """Log in as the administrator and return auth headers with user info."""
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def member_headers(client, make_user):
    """Log in as a user whose only role grants no permissions."""
    make_user("member@example.com")
    return _login(client, "member@example.com", USER_PASSWORD)


@pytest.fixture
def login_as(client):
    """Log in as any user with the default member password."""

    def _login_as(email: str, password: str = USER_PASSWORD) -> AuthHeaders:
        return _login(client, email, password)

    return _login_as
