"""
Enrollment lifecycle: enroll, complete lessons, submit quizzes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from api.models.models import Enrollment, LessonCompletion, QuizAttempt
from api.services.course_catalog import CourseCatalog
from api.services.enrollment_store import EnrollmentStore
from api.services.progress import (
    EnrollmentStatus,
    QuizGrade,
    evaluate_certificate,
    grade_quiz,
    recompute_progress,
)
from api.utils.errors import AlreadyEnrolled, CourseNotPublished, NotEnrolled
from api.utils.logger import configure_logging

logger = configure_logging()


@dataclass(frozen=True)
class QuizSubmission:
    """Outcome of one quiz submission, with the enrollment state after it."""
    grade: QuizGrade
    certificate_issued: bool
    course_completed: bool
    certificate_newly_issued: bool = False


class EnrollmentService:
    """Owns every state transition of an enrollment record."""

    def __init__(self, db: DBSession):
        self.db = db
        self.catalog = CourseCatalog(db)
        self.store = EnrollmentStore(db)

    def enroll(self, user_id: int, course_id: str) -> Enrollment:
        course = self.catalog.require(course_id)
        if not course.is_published:
            raise CourseNotPublished()
        if self.store.find_for(user_id, course_id) is not None:
            raise AlreadyEnrolled()

        now = datetime.utcnow()
        enrollment = Enrollment(
            id=str(uuid4()),
            user_id=user_id,
            course_id=course.id,
            progress=0,
            status=EnrollmentStatus.ENROLLED.value,
            best_quiz_score=0,
            certificate_issued=False,
            started_at=now,
            last_accessed_at=now,
        )
        try:
            self.store.insert(enrollment)
            # denormalized counter, lost updates under concurrent enrolls are tolerated
            course.enrollment_count = (course.enrollment_count or 0) + 1
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyEnrolled()
        self.db.refresh(enrollment)
        logger.info("user enrolled user_id=%s course_id=%s enrollment_id=%s", user_id, course_id, enrollment.id)
        return enrollment

    def complete_lesson(self, user_id: int, course_id: str, lesson_id: str) -> Enrollment:
        course = self.catalog.require(course_id)
        enrollment = self._require_enrollment(user_id, course_id)
        self.catalog.require_lesson(course, lesson_id)

        if any(c.lesson_id == lesson_id for c in enrollment.completed_lessons):
            return enrollment

        now = datetime.utcnow()
        enrollment.completed_lessons.append(
            LessonCompletion(id=str(uuid4()), lesson_id=lesson_id, completed_at=now)
        )
        recompute_progress(enrollment, len(course.lessons), now=now)
        enrollment.last_accessed_at = now
        self.store.update(enrollment)
        self.db.commit()
        self.db.refresh(enrollment)
        logger.info(
            "lesson completed user_id=%s course_id=%s lesson_id=%s progress=%s",
            user_id, course_id, lesson_id, enrollment.progress,
        )
        return enrollment

    def submit_quiz(self, user_id: int, course_id: str, answers: Iterable[tuple[str, int]]) -> QuizSubmission:
        course = self.catalog.require(course_id)
        enrollment = self._require_enrollment(user_id, course_id)

        grade = grade_quiz(course.quiz, answers)
        now = datetime.utcnow()
        enrollment.quiz_attempts.append(
            QuizAttempt(
                id=str(uuid4()),
                seq=len(enrollment.quiz_attempts) + 1,
                score=grade.score,
                total_questions=grade.total_questions,
                percentage=grade.percentage,
                answers=[a.as_dict() for a in grade.answers],
                attempted_at=now,
            )
        )
        enrollment.best_quiz_score = max(enrollment.best_quiz_score or 0, grade.percentage)
        issued = evaluate_certificate(enrollment, [l.id for l in course.lessons], grade.percentage, now=now)
        enrollment.last_accessed_at = now
        self.store.update(enrollment)
        self.db.commit()
        self.db.refresh(enrollment)

        logger.info(
            "quiz submitted user_id=%s course_id=%s score=%s/%s percentage=%s",
            user_id, course_id, grade.score, grade.total_questions, grade.percentage,
        )
        if issued:
            logger.info("certificate issued user_id=%s course_id=%s enrollment_id=%s", user_id, course_id, enrollment.id)

        return QuizSubmission(
            grade=grade,
            certificate_issued=bool(enrollment.certificate_issued),
            course_completed=enrollment.status == EnrollmentStatus.COMPLETED.value,
            certificate_newly_issued=issued,
        )

    def get_enrollment(self, user_id: int, course_id: str) -> Optional[Enrollment]:
        return self.store.find_for(user_id, course_id)

    def list_my_enrollments(self, user_id: int) -> list[Enrollment]:
        return self.store.list_for_user(user_id)

    def _require_enrollment(self, user_id: int, course_id: str) -> Enrollment:
        enrollment = self.store.find_for(user_id, course_id)
        if enrollment is None:
            raise NotEnrolled()
        return enrollment


@dataclass(frozen=True)
class BackfillSummary:
    issued: int
    already_issued: int
    not_qualified: int
    total: int


def backfill_certificates(db: DBSession) -> BackfillSummary:
    """
    Issue certificates that should have been granted already: every lesson
    completed and a best quiz score at or above the passing mark.

    The completion time is the last quiz attempt, or the last update when the
    enrollment has no attempts. Enrollments whose course is gone are skipped.
    """
    issued = already = not_qualified = 0
    enrollments = db.query(Enrollment).all()
    for enrollment in enrollments:
        if enrollment.certificate_issued:
            already += 1
            continue
        course = enrollment.course
        if course is None:
            not_qualified += 1
            continue
        completed_at = (
            enrollment.quiz_attempts[-1].attempted_at if enrollment.quiz_attempts else enrollment.updated_at
        )
        if evaluate_certificate(
            enrollment, [l.id for l in course.lessons], enrollment.best_quiz_score or 0, now=completed_at
        ):
            issued += 1
            logger.info("certificate backfilled enrollment_id=%s course_id=%s", enrollment.id, course.id)
        else:
            not_qualified += 1
    db.commit()
    return BackfillSummary(issued=issued, already_issued=already, not_qualified=not_qualified, total=len(enrollments))
