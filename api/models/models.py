from api.config import Base
from sqlalchemy import Column, Integer, String, JSON, DateTime, ForeignKey, Text, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True)
    name = Column(String, nullable=True)
    hashed_password = Column(String)
    role = Column(String, default="user", nullable=False)  # user|admin
    preferences = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Course(Base):
    __tablename__ = "courses"
    id = Column(String, primary_key=True, index=True)  # uuid
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(String, nullable=True)
    thumbnail = Column(String, default="", nullable=False)
    category = Column(String, index=True, nullable=False)
    difficulty = Column(String, index=True, nullable=False)
    duration = Column(Integer, default=0, nullable=False)  # minutes, sum of lesson durations
    tags = Column(JSON, nullable=True)  # list[str]
    prerequisites = Column(JSON, nullable=True)  # list[str]
    learning_outcomes = Column(JSON, nullable=True)  # list[str]
    instructor_name = Column(String, default="AI Super Hub", nullable=False)
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    enrollment_count = Column(Integer, default=0, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    lessons = relationship(
        "Lesson",
        backref="course",
        cascade="all, delete-orphan",
        order_by="Lesson.order_index",
    )
    quiz = relationship(
        "QuizQuestion",
        backref="course",
        cascade="all, delete-orphan",
        order_by="QuizQuestion.order_index",
    )


class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (UniqueConstraint("course_id", "order_index", name="uq_lesson_course_order"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    video_url = Column(String, default="", nullable=False)
    duration = Column(Integer, default=0, nullable=False)  # minutes
    order_index = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    id = Column(String, primary_key=True, index=True)  # uuid
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    question = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # list[str]
    correct_answer = Column(Integer, nullable=False)  # 0-based index into options
    explanation = Column(Text, default="", nullable=False)
    order_index = Column(Integer, nullable=False)


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    progress = Column(Integer, default=0, nullable=False)  # 0-100, derived from completed lessons
    status = Column(String, default="enrolled", nullable=False)  # enrolled|in-progress|completed
    best_quiz_score = Column(Integer, default=0, nullable=False)
    certificate_issued = Column(Boolean, default=False, nullable=False)
    started_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_accessed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    lessons_completed_at = Column(DateTime, nullable=True)  # progress first reached 100
    completed_at = Column(DateTime, nullable=True)  # certificate issued
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", backref="enrollments", foreign_keys=[user_id])
    course = relationship("Course", foreign_keys=[course_id])
    completed_lessons = relationship(
        "LessonCompletion",
        backref="enrollment",
        cascade="all, delete-orphan",
        order_by="LessonCompletion.completed_at",
    )
    quiz_attempts = relationship(
        "QuizAttempt",
        backref="enrollment",
        cascade="all, delete-orphan",
        order_by="QuizAttempt.seq",
    )


class LessonCompletion(Base):
    __tablename__ = "lesson_completions"
    __table_args__ = (UniqueConstraint("enrollment_id", "lesson_id", name="uq_completion_enrollment_lesson"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    enrollment_id = Column(String, ForeignKey("enrollments.id"), index=True, nullable=False)
    lesson_id = Column(String, index=True, nullable=False)
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"
    id = Column(String, primary_key=True, index=True)  # uuid
    enrollment_id = Column(String, ForeignKey("enrollments.id"), index=True, nullable=False)
    seq = Column(Integer, nullable=False)  # chronological position within the enrollment
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    percentage = Column(Integer, nullable=False)
    answers = Column(JSON, nullable=False)  # list of {question_id, selected_answer, is_correct}
    attempted_at = Column(DateTime, default=datetime.utcnow, nullable=False)
