"""
Progress, grading and certificate rules for enrollments.

These functions hold no database handle. The enrollment service loads the
records, calls into here, and persists the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence

PASSING_PERCENTAGE = 70


class EnrollmentStatus(str, Enum):
    """Lesson-driven status of an enrollment. Certificate state is tracked separately."""
    ENROLLED = "enrolled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def percentage(part: int, whole: int) -> int:
    """Integer percentage rounded half up. An empty whole yields 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def status_for_progress(progress: int) -> EnrollmentStatus:
    if progress <= 0:
        return EnrollmentStatus.ENROLLED
    if progress < 100:
        return EnrollmentStatus.IN_PROGRESS
    return EnrollmentStatus.COMPLETED


def recompute_progress(enrollment, total_lessons: int, now: Optional[datetime] = None) -> int:
    """
    Derive ``progress`` and ``status`` from the completed lessons.

    ``lessons_completed_at`` is stamped the first time progress reaches 100 and
    never moved afterwards. ``certificate_issued`` and ``completed_at`` belong
    to the certificate gate and are not touched here.
    """
    progress = percentage(len(enrollment.completed_lessons), total_lessons)
    enrollment.progress = progress
    enrollment.status = status_for_progress(progress).value
    if progress == 100 and enrollment.lessons_completed_at is None:
        enrollment.lessons_completed_at = now or datetime.utcnow()
    return progress


@dataclass(frozen=True)
class AnswerReview:
    question_id: str
    selected_answer: int
    is_correct: bool

    def as_dict(self) -> dict:
        return {
            "question_id": self.question_id,
            "selected_answer": self.selected_answer,
            "is_correct": self.is_correct,
        }


@dataclass(frozen=True)
class QuizGrade:
    score: int
    total_questions: int
    percentage: int
    answers: list[AnswerReview] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.percentage >= PASSING_PERCENTAGE


def grade_quiz(questions: Sequence, answers: Iterable[tuple[str, int]]) -> QuizGrade:
    """
    Score submitted ``(question_id, selected_answer)`` pairs against the answer key.

    Answers to unknown questions are dropped. A question answered twice is
    graded on its first answer. The total is the full question count, so
    unanswered questions count as wrong.
    """
    key = {q.id: q.correct_answer for q in questions}
    seen: set[str] = set()
    reviews: list[AnswerReview] = []
    for question_id, selected in answers:
        if question_id not in key or question_id in seen:
            continue
        seen.add(question_id)
        reviews.append(AnswerReview(question_id, selected, key[question_id] == selected))

    score = sum(1 for r in reviews if r.is_correct)
    total = len(key)
    return QuizGrade(score=score, total_questions=total, percentage=percentage(score, total), answers=reviews)


def all_lessons_completed(enrollment, lesson_ids: Iterable[str]) -> bool:
    lesson_ids = set(lesson_ids)
    if not lesson_ids:
        return False
    done = {c.lesson_id for c in enrollment.completed_lessons}
    return lesson_ids.issubset(done)


def evaluate_certificate(
    enrollment,
    lesson_ids: Iterable[str],
    attempt_percentage: int,
    now: Optional[datetime] = None,
) -> bool:
    """
    One-shot certificate transition, run after a quiz attempt is recorded.

    Returns True only on the call that issues the certificate.
    """
    if enrollment.certificate_issued:
        return False
    if attempt_percentage < PASSING_PERCENTAGE:
        return False
    if not all_lessons_completed(enrollment, lesson_ids):
        return False
    enrollment.status = EnrollmentStatus.COMPLETED.value
    enrollment.certificate_issued = True
    enrollment.completed_at = now or datetime.utcnow()
    return True
