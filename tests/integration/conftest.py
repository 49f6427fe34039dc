"""
Integration test fixtures. Overrides get_db for API tests with in-memory DB.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture
def override_get_db():
    """Create in-memory engine and session factory for API tests."""
    import api.models  # noqa: F401
    from api.config import Base
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def api_client(override_get_db):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_db
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def _add_user(override_get_db, email, password, role="user"):
    from api.models.models import User
    from api.utils.jwt import get_password_hash
    db_gen = override_get_db()
    db = next(db_gen)
    try:
        db.add(User(email=email, name=email.split("@")[0], hashed_password=get_password_hash(password), role=role))
        db.commit()
    finally:
        db.close()


@pytest.fixture
def admin_client(api_client, override_get_db):
    """Client logged in as an admin. Shares the cookie jar of ``api_client``."""
    _add_user(override_get_db, "admin@example.com", "adminpass123", role="admin")
    response = api_client.post("/auth/login", json={"email": "admin@example.com", "password": "adminpass123"})
    assert response.status_code == 200
    return api_client


@pytest.fixture
def published_course(admin_client):
    """Create a published course with two lessons and quiz answers [1, 0], then log out."""
    client = admin_client
    course = client.post(
        "/courses",
        json={
            "title": "Deep Learning 101",
            "description": "Neural networks from scratch",
            "category": "deep-learning",
            "difficulty": "beginner",
            "is_published": True,
        },
    ).json()
    lessons = [
        client.post(f"/courses/{course['id']}/lessons", json={"title": t, "content": "...", "duration": 30}).json()
        for t in ("Perceptrons", "Backprop")
    ]
    quiz = client.post(
        f"/courses/{course['id']}/quiz",
        json={
            "questions": [
                {"question": "Q1?", "options": ["a", "b"], "correct_answer": 1},
                {"question": "Q2?", "options": ["a", "b"], "correct_answer": 0},
            ]
        },
    ).json()
    client.post("/auth/logout")
    client.cookies.clear()
    return {"id": course["id"], "lessons": [l["id"] for l in lessons], "questions": [q["id"] for q in quiz["added"]]}


@pytest.fixture
def learner_client(api_client, published_course):
    """Client registered and logged in as a learner, after the course exists."""
    response = api_client.post(
        "/auth/register",
        json={
            "name": "Learner",
            "email": "learner@example.com",
            "password": "learnpass123",
            "confirm_password": "learnpass123",
        },
    )
    assert response.status_code == 200
    return api_client
