import inspect
import os

# Settings are read once per process; provide test values before app import.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_REQUESTS", "false")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from accounts.core.security import PasswordHasher, get_password_hasher  # noqa: E402
from accounts.db.engine import get_session  # noqa: E402
from accounts.main import app  # noqa: E402
from accounts.user.models import User, UserProfile  # noqa: E402
from accounts.user.service import UserService  # noqa: E402
from accounts.user.store import UserStore  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio."""
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite database shared by every connection in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="hasher")
def hasher_fixture() -> PasswordHasher:
    """Cheap bcrypt work factor for tests."""
    return PasswordHasher(rounds=4)


@pytest.fixture(name="service")
def service_fixture(session: Session, hasher: PasswordHasher) -> UserService:
    return UserService(UserStore(session), hasher)


@pytest.fixture(name="user_payload")
def user_payload_fixture() -> dict:
    return {
        "username": "alice",
        "email": "a@x.com",
        "password": "secret123",
        "role": "user",
        "status": "active",
        "profile": {"fullName": "Alice A"},
    }


@pytest.fixture(name="existing_user")
def existing_user_fixture(session: Session, hasher: PasswordHasher) -> User:
    """A stored user with a profile, created outside the API."""
    user = User(
        username="bob",
        email="bob@example.com",
        password=hasher.hash("hunter22"),
    )
    session.add(user)
    session.flush()
    session.add(UserProfile(user_id=user.id, full_name="Bob B", city="Oslo"))
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="client")
def client_fixture(session: Session, hasher: PasswordHasher):
    """Test client bound to the per-test database session."""

    def get_session_override():
        return session

    def get_password_hasher_override():
        return hasher

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_password_hasher] = get_password_hasher_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="lenient_client")
def lenient_client_fixture(client: TestClient):
    """Client that returns 500 responses instead of re-raising server errors."""
    return TestClient(client.app, raise_server_exceptions=False)
