import os
import tempfile
from datetime import date, timedelta

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobboard-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.main import app
from jobboard.database import Base, get_db, enable_sqlite_foreign_keys
from jobboard.models.user import User, UserRole
from jobboard.services.ai_service import CareerAIService, get_ai_service
from jobboard.utils.hash import get_password_hash

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"
JOB_DESCRIPTION = (
    "Build and run the services behind our hiring platform, "
    "working closely with product and design."
)


class FakeAIService(CareerAIService):
    """Replays queued model replies instead of calling the completion API."""

    def __new__(cls, *args, **kwargs):
        return object.__new__(cls)

    def __init__(self):
        self.model = "fake-model"
        self.replies = []
        self.prompts = []
        self.error = None

    def _call_model(self, system_role, prompt, temperature, max_tokens):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def client(fake_ai):
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(client):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(email, role="applicant", first_name="Test", last_name="User"):
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": PASSWORD,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        return auth_headers(response.json()["data"]["access_token"])

    return _register


@pytest.fixture
def applicant_headers(register):
    return register("applicant@example.com", "applicant", "Alex", "Applicant")


@pytest.fixture
def employer_headers(register):
    return register("employer@example.com", "employer", "Erin", "Employer")


@pytest.fixture
def admin_headers(client, db_session):
    db_session.add(
        User(
            email="admin@example.com",
            hashed_password=get_password_hash(PASSWORD),
            first_name="Ada",
            last_name="Admin",
            role=UserRole.ADMIN,
        )
    )
    db_session.commit()
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    return auth_headers(response.json()["data"]["access_token"])


@pytest.fixture
def make_job(client):
    def _make_job(headers, **overrides):
        payload = {
            "title": "Backend Engineer",
            "description": JOB_DESCRIPTION,
            "requirements": "Python, SQL",
            "location": "Remote",
            "salary_min": 50000,
            "salary_max": 90000,
            "employment_type": "full-time",
            "experience_level": "mid",
            "application_deadline": (date.today() + timedelta(days=30)).isoformat(),
        }
        payload.update(overrides)
        response = client.post("/api/jobs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_job


@pytest.fixture
def make_resume(client):
    def _make_resume(headers, **fields):
        form = {"title": "Senior Python Developer", "summary": "Ten years of building web services."}
        form.update(fields)
        response = client.post("/api/resumes", data=form, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_resume


@pytest.fixture
def apply(client):
    def _apply(headers, job_id, resume_id, cover_letter=None):
        payload = {"job_id": job_id, "resume_id": resume_id}
        if cover_letter is not None:
            payload["cover_letter"] = cover_letter
        return client.post("/api/applications", json=payload, headers=headers)

    return _apply
