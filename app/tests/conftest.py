import os
import tempfile
from datetime import timedelta
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read at import time, so the test environment goes in first.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "testsecretkey"
os.environ["EXPORT_DIR"] = tempfile.mkdtemp(prefix="progress-board-exports-")
os.environ.pop("FIRST_SUPERUSER_USERNAME", None)

from app import models  # noqa: E402,F401
from app.models.base import Base  # noqa: E402
from app.core.settings import settings as app_settings  # noqa: E402
from app.main import app  # noqa: E402

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

from app.dependencies import get_db, get_export_sink, get_session_factory  # noqa: E402
from app.crud.user import create_user, get_user_by_username  # noqa: E402
from app.core import security  # noqa: E402
from app.schemas.auth import Identity  # noqa: E402
from app.services.export_sink import FileExportSink  # noqa: E402


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test. Code under test commits and rolls back for real,
    so isolation comes from recreating the tables rather than an outer transaction.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def export_dir(tmp_path) -> str:
    return str(tmp_path / "exports")


@pytest.fixture(scope="function")
def client(db: Session, export_dir: str) -> Generator[TestClient, None, None]:
    """
    TestClient wired to the test session and a per-test export directory.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    app.dependency_overrides[get_export_sink] = lambda: FileExportSink(export_dir)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(db: Session) -> Any:
    """
    Named user with a display name.
    """
    user = get_user_by_username(db, username="testuser")
    if not user:
        user = create_user(db=db, data={
            "username": "testuser",
            "email": "testuser@example.com",
            "password": "testpassword",
            "full_name": "Test User",
            "is_active": True,
        })
    return user


@pytest.fixture(scope="function")
def user_token_headers(test_user: Any) -> dict[str, str]:
    token, _ = security.create_access_token(
        data={"sub": test_user.username},
        expires_delta=timedelta(minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def anonymous_token_headers() -> dict[str, str]:
    token, _, _ = security.create_anonymous_token()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def identity(test_user: Any) -> Identity:
    return Identity(user_id=str(test_user.id), display_name=test_user.full_name, is_anonymous=False)


@pytest.fixture
def anonymous_identity() -> Identity:
    return Identity(user_id="anon-0123456789abcdef", display_name=None, is_anonymous=True)


@pytest.fixture
def project_payload() -> dict:
    return {
        "project_code": "LTC-20001",
        "name": "North Bridge Repair",
        "responsible_person": "Sam Ortiz",
        "planned_activity": "Deck demolition",
        "planned_start": "2024-05-01T00:00:00Z",
        "planned_end": "2030-05-15T00:00:00Z",
    }


@pytest.fixture
def session_factory(db: Session):
    """Factory bound to the same in-memory database as ``db``."""
    return TestingSessionLocal
