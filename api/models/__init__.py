"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- User, Course, Lesson, QuizQuestion, Enrollment, LessonCompletion, QuizAttempt
"""

from api.models.models import (
    User,
    Course,
    Lesson,
    QuizQuestion,
    Enrollment,
    LessonCompletion,
    QuizAttempt,
)

__all__ = [
    "User",
    "Course",
    "Lesson",
    "QuizQuestion",
    "Enrollment",
    "LessonCompletion",
    "QuizAttempt",
]
