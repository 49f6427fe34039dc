"""
Account-level operations that reach across enrollments.
"""

from dataclasses import dataclass

from sqlalchemy.orm import Session as DBSession

from api.models.models import Course, User
from api.services.enrollment_store import EnrollmentStore
from api.services.progress import EnrollmentStatus
from api.utils.logger import configure_logging

logger = configure_logging()


@dataclass(frozen=True)
class LearningStats:
    enrollments_count: int
    completed_courses: int
    certificates: int
    learning_hours: float


class AccountService:
    def __init__(self, db: DBSession):
        self.db = db
        self.enrollments = EnrollmentStore(db)

    def delete_account(self, user: User) -> int:
        """Delete the user's enrollments, then the user. Returns enrollments removed."""
        user_id = int(user.id)
        removed = self.enrollments.delete_for_user(user_id)
        # authored courses outlive their creator
        self.db.query(Course).filter(Course.created_by == user_id).update(
            {Course.created_by: None}, synchronize_session="fetch"
        )
        self.db.delete(user)
        self.db.commit()
        logger.info("account deleted user_id=%s enrollments_removed=%s", user_id, removed)
        return removed

    def learning_stats(self, user_id: int) -> LearningStats:
        enrollments = self.enrollments.list_for_user(user_id)
        completed = 0
        certificates = 0
        minutes = 0.0
        for e in enrollments:
            if e.certificate_issued:
                certificates += 1
                if e.status == EnrollmentStatus.COMPLETED.value:
                    completed += 1
            course = e.course
            total_lessons = len(course.lessons) if course else 0
            if course and total_lessons:
                # time spent is proportional to the share of lessons done
                minutes += (course.duration or 0) * len(e.completed_lessons) / total_lessons
        return LearningStats(
            enrollments_count=len(enrollments),
            completed_courses=completed,
            certificates=certificates,
            learning_hours=round(minutes / 60, 1),
        )
