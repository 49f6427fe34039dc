"""Unit tests for progress, grading and certificate rules (no DB)."""
from datetime import datetime
from types import SimpleNamespace

import pytest

from api.services.progress import (
    EnrollmentStatus,
    all_lessons_completed,
    evaluate_certificate,
    grade_quiz,
    percentage,
    recompute_progress,
    status_for_progress,
)


def _enrollment(done=(), certificate=False):
    return SimpleNamespace(
        completed_lessons=[SimpleNamespace(lesson_id=l) for l in done],
        progress=0,
        status="enrolled",
        certificate_issued=certificate,
        completed_at=None,
        lessons_completed_at=None,
    )


def _questions(*answers):
    return [SimpleNamespace(id=f"q{i}", correct_answer=a) for i, a in enumerate(answers, start=1)]


@pytest.mark.unit
class TestPercentage:
    def test_rounds_half_up(self):
        assert percentage(1, 2) == 50
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(1, 8) == 13  # 12.5

    def test_empty_whole_is_zero(self):
        assert percentage(0, 0) == 0
        assert percentage(3, 0) == 0

    def test_full(self):
        assert percentage(4, 4) == 100


@pytest.mark.unit
class TestStatusForProgress:
    def test_bands(self):
        assert status_for_progress(0) is EnrollmentStatus.ENROLLED
        assert status_for_progress(1) is EnrollmentStatus.IN_PROGRESS
        assert status_for_progress(99) is EnrollmentStatus.IN_PROGRESS
        assert status_for_progress(100) is EnrollmentStatus.COMPLETED


@pytest.mark.unit
class TestRecomputeProgress:
    def test_partial(self):
        e = _enrollment(done=["l1"])
        assert recompute_progress(e, 2) == 50
        assert e.status == "in-progress"
        assert e.lessons_completed_at is None

    def test_full_stamps_lessons_completed_once(self):
        first = datetime(2026, 1, 1)
        e = _enrollment(done=["l1", "l2"])
        recompute_progress(e, 2, now=first)
        assert e.progress == 100
        assert e.status == "completed"
        assert e.lessons_completed_at == first
        recompute_progress(e, 2, now=datetime(2026, 2, 1))
        assert e.lessons_completed_at == first

    def test_does_not_touch_certificate(self):
        e = _enrollment(done=["l1", "l2"])
        recompute_progress(e, 2)
        assert e.certificate_issued is False
        assert e.completed_at is None

    def test_no_lessons_means_zero(self):
        e = _enrollment()
        assert recompute_progress(e, 0) == 0
        assert e.status == "enrolled"


@pytest.mark.unit
class TestGradeQuiz:
    def test_all_correct(self):
        grade = grade_quiz(_questions(1, 0), [("q1", 1), ("q2", 0)])
        assert (grade.score, grade.total_questions, grade.percentage) == (2, 2, 100)
        assert grade.passed is True
        assert [a.is_correct for a in grade.answers] == [True, True]

    def test_half_correct_fails(self):
        grade = grade_quiz(_questions(1, 0), [("q1", 1), ("q2", 2)])
        assert grade.percentage == 50
        assert grade.passed is False

    def test_unknown_question_is_dropped(self):
        grade = grade_quiz(_questions(1, 0), [("nope", 1), ("q1", 1)])
        assert [a.question_id for a in grade.answers] == ["q1"]
        assert grade.score == 1

    def test_unanswered_questions_count_against(self):
        grade = grade_quiz(_questions(1, 0, 2), [("q1", 1)])
        assert grade.total_questions == 3
        assert grade.percentage == 33

    def test_first_answer_wins(self):
        grade = grade_quiz(_questions(1), [("q1", 0), ("q1", 1)])
        assert grade.score == 0
        assert len(grade.answers) == 1

    def test_empty_quiz(self):
        grade = grade_quiz([], [("q1", 0)])
        assert (grade.score, grade.total_questions, grade.percentage) == (0, 0, 0)
        assert grade.answers == []

    def test_seventy_passes(self):
        questions = _questions(*([0] * 10))
        grade = grade_quiz(questions, [(q.id, 0 if i < 7 else 1) for i, q in enumerate(questions)])
        assert grade.percentage == 70
        assert grade.passed is True


@pytest.mark.unit
class TestCertificateGate:
    def test_all_lessons_completed_requires_lessons(self):
        assert all_lessons_completed(_enrollment(done=["l1"]), []) is False

    def test_all_lessons_completed_subset(self):
        assert all_lessons_completed(_enrollment(done=["l1", "l2", "gone"]), ["l1", "l2"]) is True
        assert all_lessons_completed(_enrollment(done=["l1"]), ["l1", "l2"]) is False

    def test_issues_when_lessons_done_and_passed(self):
        now = datetime(2026, 3, 1)
        e = _enrollment(done=["l1", "l2"])
        assert evaluate_certificate(e, ["l1", "l2"], 70, now=now) is True
        assert e.certificate_issued is True
        assert e.status == "completed"
        assert e.completed_at == now

    def test_not_issued_below_passing(self):
        e = _enrollment(done=["l1", "l2"])
        assert evaluate_certificate(e, ["l1", "l2"], 69) is False
        assert e.certificate_issued is False

    def test_not_issued_with_lessons_missing(self):
        e = _enrollment(done=["l1"])
        assert evaluate_certificate(e, ["l1", "l2"], 100) is False
        assert e.completed_at is None

    def test_one_shot(self):
        first = datetime(2026, 3, 1)
        e = _enrollment(done=["l1"])
        evaluate_certificate(e, ["l1"], 100, now=first)
        assert evaluate_certificate(e, ["l1"], 100, now=datetime(2026, 4, 1)) is False
        assert e.completed_at == first
