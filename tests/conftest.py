"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine shared by every connection of the test."""
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session. Uses api.config.Base for schema."""
    import api.models  # noqa: F401
    from api.config import Base
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def test_user(db_session):
    from api.models.models import User
    user = User(email="learner@example.com", name="Learner", hashed_password="", role="user")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    from api.models.models import User
    user = User(email="other@example.com", name="Other", hashed_password="", role="user")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def make_course(db_session, course_id="test-course-123", *, lessons=2, published=True, answers=(1, 0)):
    """Course with ``lessons`` lessons and one quiz question per entry in ``answers``."""
    from api.models.models import Course, Lesson, QuizQuestion
    course = Course(
        id=course_id,
        title="Machine Learning Fundamentals",
        description="Learn core ML concepts and practical applications",
        category="machine-learning",
        difficulty="beginner",
        is_published=published,
        tags=[],
        prerequisites=[],
        learning_outcomes=[],
    )
    for i in range(1, lessons + 1):
        course.lessons.append(
            Lesson(id=f"{course_id}-l{i}", title=f"Lesson {i}", content="...", duration=30, order_index=i)
        )
    for i, correct in enumerate(answers, start=1):
        course.quiz.append(
            QuizQuestion(
                id=f"{course_id}-q{i}",
                question=f"Question {i}?",
                options=["a", "b", "c"],
                correct_answer=correct,
                order_index=i,
            )
        )
    course.duration = 30 * lessons
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


@pytest.fixture
def test_course(db_session):
    """Published course with lessons l1, l2 and quiz answers [1, 0]."""
    return make_course(db_session)


@pytest.fixture
def draft_course(db_session):
    return make_course(db_session, "draft-course", published=False)


@pytest.fixture
def course_factory(db_session):
    def _make(course_id, **kwargs):
        return make_course(db_session, course_id, **kwargs)
    return _make
