import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobboard.database import _set_sqlite_pragmas, get_db
from jobboard.main import app
from jobboard.config import settings
from jobboard.models.job import Job
from jobboard.services.admin_service import admin_service
from jobboard.utils.identifiers import new_id
from jobboard.utils.security import hash_password

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "test-admin-pass-123"


@pytest.fixture(scope="session")
def admin_password_hash():
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "JobBoard"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "jobboard.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from jobboard.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db_session(test_db):
    db = test_db()
    yield db
    db.close()


@pytest.fixture
def fresh_admin_service():
    """Reset admin sessions for each test."""
    original = admin_service.__dict__.copy()
    admin_service._active_tokens = {}
    yield admin_service
    admin_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data_dir, test_db, fresh_admin_service, admin_password_hash):
    original = (settings.data_dir, settings.admin_username, settings.admin_password_hash)
    settings.data_dir = tmp_data_dir
    settings.admin_username = ADMIN_USERNAME
    settings.admin_password_hash = admin_password_hash
    c = TestClient(app)
    yield c
    settings.data_dir, settings.admin_username, settings.admin_password_hash = original


@pytest.fixture
def admin_headers(client):
    r = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}


@pytest.fixture
def make_job(db_session):
    """Insert a job row directly, with control over created_at."""

    def _make_job(**overrides):
        created_at = overrides.pop("created_at", "2024-01-01T00:00:00.000000Z")
        fields = {
            "id": new_id(),
            "title": "Software Engineer",
            "company": "Acme Corp",
            "location": "Berlin, Germany",
            "category": "Engineering",
            "type": "Full Time",
            "salary": None,
            "description": "Build things.",
            "requirements": [],
            "responsibilities": [],
            "tags": [],
            "created_at": created_at,
            "updated_at": created_at,
        }
        fields.update(overrides)
        job = Job(**fields)
        db_session.add(job)
        db_session.commit()
        return fields["id"]

    return _make_job
