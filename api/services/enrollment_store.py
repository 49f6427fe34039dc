"""
Persistence for enrollment records.

The store adds, loads and deletes rows but never commits; the calling
service owns the transaction so cascades land atomically with the change
that triggered them.
"""

from typing import Optional

from sqlalchemy.orm import Session as DBSession

from api.models.models import Enrollment


class EnrollmentStore:
    def __init__(self, db: DBSession):
        self.db = db

    def find_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        return self.db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()

    def find_for(self, user_id: int, course_id: str) -> Optional[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
            .first()
        )

    def list_for_user(self, user_id: int) -> list[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.last_accessed_at.desc())
            .all()
        )

    def list_for_course(self, course_id: str) -> list[Enrollment]:
        return self.db.query(Enrollment).filter(Enrollment.course_id == course_id).all()

    def insert(self, enrollment: Enrollment) -> Enrollment:
        self.db.add(enrollment)
        self.db.flush()
        return enrollment

    def update(self, enrollment: Enrollment) -> Enrollment:
        self.db.add(enrollment)
        self.db.flush()
        return enrollment

    def delete_for_course(self, course_id: str) -> int:
        """Delete every enrollment of a course, with its completions and attempts."""
        return self._delete_all(self.list_for_course(course_id))

    def delete_for_user(self, user_id: int) -> int:
        """Delete every enrollment owned by a user, with its completions and attempts."""
        return self._delete_all(self.db.query(Enrollment).filter(Enrollment.user_id == user_id).all())

    def _delete_all(self, enrollments: list[Enrollment]) -> int:
        # Per-row delete so the ORM cascades reach lesson_completions and quiz_attempts
        for e in enrollments:
            self.db.delete(e)
        self.db.flush()
        return len(enrollments)
