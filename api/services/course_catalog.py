"""
Course catalog: read lookups used by the enrollment flow and admin editing.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy import func, or_
from sqlalchemy.orm import Session as DBSession

from api.models.models import Course, Lesson, QuizQuestion
from api.services.enrollment_store import EnrollmentStore
from api.services.progress import recompute_progress
from api.utils.errors import CourseNotFound, DuplicateLessonOrder, LessonNotFound, QuestionNotFound
from api.utils.logger import configure_logging

logger = configure_logging()

SORT_FIELDS = {
    "-created_at": Course.created_at.desc(),
    "created_at": Course.created_at.asc(),
    "-enrollment_count": Course.enrollment_count.desc(),
    "title": Course.title.asc(),
}

COURSE_FIELDS = (
    "title",
    "description",
    "short_description",
    "thumbnail",
    "category",
    "difficulty",
    "tags",
    "prerequisites",
    "learning_outcomes",
    "instructor_name",
    "is_published",
    "is_featured",
)

NULLABLE_COURSE_FIELDS = ("short_description",)


class CourseCatalog:
    """Course, lesson and quiz lookups plus admin edits."""

    def __init__(self, db: DBSession):
        self.db = db
        self.enrollments = EnrollmentStore(db)

    # ---- lookups ----

    def get(self, course_id: str) -> Optional[Course]:
        return self.db.query(Course).filter(Course.id == course_id).first()

    def require(self, course_id: str) -> Course:
        course = self.get(course_id)
        if course is None:
            raise CourseNotFound()
        return course

    def list_courses(
        self,
        *,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        search: Optional[str] = None,
        featured: bool = False,
        include_drafts: bool = False,
        sort: str = "-created_at",
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Course], int]:
        q = self.db.query(Course)
        if not include_drafts:
            q = q.filter(Course.is_published == True)  # noqa: E712
        if category:
            q = q.filter(Course.category == category)
        if difficulty:
            q = q.filter(Course.difficulty == difficulty)
        if featured:
            q = q.filter(Course.is_featured == True)  # noqa: E712
        if search:
            pattern = f"%{search.strip()}%"
            q = q.filter(or_(Course.title.ilike(pattern), Course.description.ilike(pattern)))
        total = q.count()
        order = SORT_FIELDS.get(sort, SORT_FIELDS["-created_at"])
        courses = q.order_by(order).offset((page - 1) * limit).limit(limit).all()
        return courses, total

    def featured(self, limit: int = 6) -> list[Course]:
        return (
            self.db.query(Course)
            .filter(Course.is_published == True, Course.is_featured == True)  # noqa: E712
            .order_by(Course.enrollment_count.desc())
            .limit(limit)
            .all()
        )

    def categories(self) -> list[tuple[str, int]]:
        rows = (
            self.db.query(Course.category, func.count(Course.id))
            .filter(Course.is_published == True)  # noqa: E712
            .group_by(Course.category)
            .order_by(func.count(Course.id).desc())
            .all()
        )
        return [(category, int(count)) for category, count in rows]

    def require_lesson(self, course: Course, lesson_id: str) -> Lesson:
        lesson = next((l for l in course.lessons if l.id == lesson_id), None)
        if lesson is None:
            raise LessonNotFound()
        return lesson

    # ---- course admin ----

    def create_course(self, data: Dict[str, Any], creator_id: Optional[int]) -> Course:
        course = Course(id=str(uuid4()), created_by=creator_id)
        for key in COURSE_FIELDS:
            if key in data and data[key] is not None:
                setattr(course, key, data[key])
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        logger.info("course created course_id=%s title=%s", course.id, course.title)
        return course

    def update_course(self, course_id: str, updates: Dict[str, Any]) -> Course:
        course = self.require(course_id)
        for key, value in updates.items():
            if key not in COURSE_FIELDS:
                continue
            # only short_description may be cleared
            if value is None and key not in NULLABLE_COURSE_FIELDS:
                continue
            setattr(course, key, value)
        course.updated_at = datetime.utcnow()
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        logger.info("course updated course_id=%s", course.id)
        return course

    def delete_course(self, course_id: str) -> int:
        """Delete a course and every enrollment in it. Returns the number of enrollments removed."""
        course = self.require(course_id)
        removed = self.enrollments.delete_for_course(course.id)
        self.db.delete(course)
        self.db.commit()
        logger.info("course deleted course_id=%s enrollments_removed=%s", course_id, removed)
        return removed

    # ---- lessons ----

    def add_lesson(self, course_id: str, data: Dict[str, Any]) -> Lesson:
        course = self.require(course_id)
        order_index = data.get("order_index") or max((l.order_index for l in course.lessons), default=0) + 1
        self._check_order_free(course, order_index)
        lesson = Lesson(
            id=str(uuid4()),
            course_id=course.id,
            title=data["title"],
            content=data["content"],
            video_url=data.get("video_url") or "",
            duration=data.get("duration") or 0,
            order_index=order_index,
        )
        course.lessons.append(lesson)
        self._after_lessons_changed(course)
        self.db.commit()
        self.db.refresh(lesson)
        logger.info("lesson added course_id=%s lesson_id=%s order=%s", course.id, lesson.id, order_index)
        return lesson

    def update_lesson(self, course_id: str, lesson_id: str, updates: Dict[str, Any]) -> Lesson:
        course = self.require(course_id)
        lesson = self.require_lesson(course, lesson_id)
        new_order = updates.get("order_index")
        if new_order is not None and new_order != lesson.order_index:
            self._check_order_free(course, new_order)
        for key in ("title", "content", "video_url", "duration", "order_index"):
            if key in updates and updates[key] is not None:
                setattr(lesson, key, updates[key])
        self._refresh_duration(course)
        self.db.commit()
        self.db.refresh(lesson)
        return lesson

    def delete_lesson(self, course_id: str, lesson_id: str) -> None:
        """Remove a lesson and every completion recorded against it."""
        course = self.require(course_id)
        lesson = self.require_lesson(course, lesson_id)
        course.lessons.remove(lesson)
        for enrollment in self.enrollments.list_for_course(course.id):
            for completion in [c for c in enrollment.completed_lessons if c.lesson_id == lesson_id]:
                enrollment.completed_lessons.remove(completion)
        self._after_lessons_changed(course)
        self.db.commit()
        logger.info("lesson deleted course_id=%s lesson_id=%s", course.id, lesson_id)

    # ---- quiz ----

    def add_questions(self, course_id: str, questions: list[Dict[str, Any]]) -> list[QuizQuestion]:
        course = self.require(course_id)
        next_order = max((q.order_index for q in course.quiz), default=0) + 1
        added: list[QuizQuestion] = []
        for offset, q in enumerate(questions):
            question = QuizQuestion(
                id=str(uuid4()),
                course_id=course.id,
                question=q["question"],
                options=list(q["options"]),
                correct_answer=q["correct_answer"],
                explanation=q.get("explanation") or "",
                order_index=next_order + offset,
            )
            course.quiz.append(question)
            added.append(question)
        course.updated_at = datetime.utcnow()
        self.db.commit()
        logger.info("quiz questions added course_id=%s count=%s", course.id, len(added))
        return added

    def delete_question(self, course_id: str, question_id: str) -> None:
        course = self.require(course_id)
        question = next((q for q in course.quiz if q.id == question_id), None)
        if question is None:
            raise QuestionNotFound()
        course.quiz.remove(question)
        course.updated_at = datetime.utcnow()
        self.db.commit()

    # ---- helpers ----

    def _check_order_free(self, course: Course, order_index: int) -> None:
        if any(l.order_index == order_index for l in course.lessons):
            raise DuplicateLessonOrder()

    def _refresh_duration(self, course: Course) -> None:
        course.duration = sum(l.duration or 0 for l in course.lessons)
        course.updated_at = datetime.utcnow()

    def _after_lessons_changed(self, course: Course) -> None:
        # progress is a function of the lesson count, so every enrollment moves with it
        self._refresh_duration(course)
        total = len(course.lessons)
        for enrollment in self.enrollments.list_for_course(course.id):
            recompute_progress(enrollment, total)
        self.db.flush()
