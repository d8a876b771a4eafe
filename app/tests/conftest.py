import os

# settings are read at import time, so the environment must be in place first
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "adminpassword"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ.pop("SMTP_HOST", None)

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.db.database import Base, SessionLocal, engine, get_db
from app.models.mentor_models import Mentor
from app.models.project_models import Project, ProjectStatus
from app.models.student_models import Student
from app.services import notification_service
from app.services.dependencies import ADMIN_SUBJECT_ID, Role, create_access_token
from app.utils.hashing import get_password_hash

STUDENT_PASSWORD = "student-pass"
MENTOR_PASSWORD = "mentor-pass"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sent_emails(monkeypatch):
    sent = []

    def fake_send_email(to, subject, html):
        sent.append({"to": to, "subject": subject, "html": html})

    monkeypatch.setattr(notification_service, "send_email", fake_send_email)
    return sent


@pytest.fixture
def make_student(db):
    counter = {"n": 0}

    def _make(**overrides) -> Student:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "name": f"Student {n}",
            "roll_no": f"{1000 + n}",
            "course": "BTech",
            "section": "A",
            "email": f"student{n}@example.com",
            "password": get_password_hash(STUDENT_PASSWORD),
            "project_status": {},
        }
        data.update(overrides)
        student = Student(**data)
        db.add(student)
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def make_mentor(db):
    counter = {"n": 0}

    def _make(**overrides) -> Mentor:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "name": f"Mentor {n}",
            "email": f"mentor{n}@example.com",
            "password": get_password_hash(MENTOR_PASSWORD),
        }
        data.update(overrides)
        mentor = Mentor(**data)
        db.add(mentor)
        db.commit()
        db.refresh(mentor)
        return mentor

    return _make


@pytest.fixture
def make_project(db):
    def _make(
        title: str = "Campus Navigator",
        status: ProjectStatus = ProjectStatus.pending,
        mentor: Mentor | None = None,
        applicants: list[Student] | None = None,
    ) -> Project:
        project = Project(
            title=title,
            description="Indoor maps for the campus",
            tech_stack=["python", "fastapi"],
            status=status,
            mentor=mentor,
        )
        for student in applicants or []:
            project.students_applied.append(student)
        db.add(project)
        db.commit()
        db.refresh(project)
        return project

    return _make


def auth_headers(subject_id: str, role: Role) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject_id, role)}"}


@pytest.fixture
def admin_headers() -> dict:
    return auth_headers(ADMIN_SUBJECT_ID, Role.admin)


@pytest.fixture
def headers_for():
    return auth_headers
