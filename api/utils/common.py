"""
Common utility functions used across multiple routes.
"""

from datetime import datetime
from math import ceil
from typing import Optional

from api.models.models import Course, Enrollment, Lesson, QuizQuestion, User
from api.schemas.course_schemas import (
    CourseResponse,
    CourseSummary,
    LessonResponse,
    Pagination,
    QuizQuestionResponse,
)
from api.schemas.enrollment_schemas import (
    AnswerReview,
    EnrollmentResponse,
    LessonCompletionResponse,
    MyCourseItem,
    MyCourseSummary,
    QuizAttemptResponse,
)
from api.schemas.user_schemas import UserResponse


def iso_format(dt: datetime) -> str:
    """Format datetime as ISO string with Z suffix."""
    return dt.isoformat() + "Z"


def iso_or_none(dt: Optional[datetime]) -> Optional[str]:
    return iso_format(dt) if dt is not None else None


def paginate(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        current_page=page,
        items_per_page=limit,
        total_items=total,
        total_pages=ceil(total / limit) if limit > 0 else 0,
    )


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=int(user.id),
        email=user.email,
        name=user.name,
        role=user.role,
        preferences=user.preferences if isinstance(user.preferences, dict) else None,
    )


def course_summary(c: Course) -> CourseSummary:
    return CourseSummary(
        id=c.id,
        title=c.title,
        short_description=c.short_description,
        thumbnail=c.thumbnail or "",
        category=c.category,
        difficulty=c.difficulty,
        duration=int(c.duration or 0),
        lesson_count=len(c.lessons),
        is_published=bool(c.is_published),
        is_featured=bool(c.is_featured),
        enrollment_count=int(c.enrollment_count or 0),
        created_at=iso_format(c.created_at),
    )


def lesson_response(l: Lesson) -> LessonResponse:
    return LessonResponse(
        id=l.id,
        title=l.title,
        content=l.content,
        video_url=l.video_url or "",
        duration=int(l.duration or 0),
        order_index=l.order_index,
    )


def quiz_question_response(q: QuizQuestion, *, with_answer: bool) -> QuizQuestionResponse:
    return QuizQuestionResponse(
        id=q.id,
        question=q.question,
        options=list(q.options or []),
        order_index=q.order_index,
        correct_answer=q.correct_answer if with_answer else None,
        explanation=q.explanation if with_answer else None,
    )


def course_response(c: Course, *, with_answers: bool = False) -> CourseResponse:
    """Full course view. The answer key is left out unless ``with_answers``."""
    summary = course_summary(c)
    return CourseResponse(
        **summary.model_dump(),
        description=c.description,
        tags=c.tags or [],
        prerequisites=c.prerequisites or [],
        learning_outcomes=c.learning_outcomes or [],
        instructor_name=c.instructor_name,
        lessons=[lesson_response(l) for l in c.lessons],
        quiz=[quiz_question_response(q, with_answer=with_answers) for q in c.quiz],
        updated_at=iso_format(c.updated_at),
    )


def enrollment_response(e: Enrollment) -> EnrollmentResponse:
    return EnrollmentResponse(
        id=e.id,
        user_id=int(e.user_id),
        course_id=e.course_id,
        progress=int(e.progress or 0),
        status=e.status,
        completed_lessons=[
            LessonCompletionResponse(lesson_id=c.lesson_id, completed_at=iso_format(c.completed_at))
            for c in e.completed_lessons
        ],
        quiz_attempts=[
            QuizAttemptResponse(
                score=a.score,
                total_questions=a.total_questions,
                percentage=a.percentage,
                answers=[AnswerReview(**r) for r in (a.answers or [])],
                attempted_at=iso_format(a.attempted_at),
            )
            for a in e.quiz_attempts
        ],
        best_quiz_score=int(e.best_quiz_score or 0),
        certificate_issued=bool(e.certificate_issued),
        started_at=iso_format(e.started_at),
        last_accessed_at=iso_format(e.last_accessed_at),
        lessons_completed_at=iso_or_none(e.lessons_completed_at),
        completed_at=iso_or_none(e.completed_at),
    )


def my_course_item(e: Enrollment) -> MyCourseItem:
    """Enrollment joined with the denormalized course summary for the dashboard."""
    c = e.course
    total_lessons = len(c.lessons)
    return MyCourseItem(
        enrollment_id=e.id,
        course=MyCourseSummary(
            id=c.id,
            title=c.title,
            short_description=c.short_description,
            thumbnail=c.thumbnail or "",
            category=c.category,
            difficulty=c.difficulty,
            duration=int(c.duration or 0),
            lesson_count=total_lessons,
        ),
        progress=int(e.progress or 0),
        status=e.status,
        completed_lessons=len(e.completed_lessons),
        total_lessons=total_lessons,
        best_quiz_score=int(e.best_quiz_score or 0),
        certificate_issued=bool(e.certificate_issued),
        last_accessed_at=iso_format(e.last_accessed_at),
        completed_at=iso_or_none(e.completed_at),
    )
