"""Unit tests for catalog queries and admin edits, including their effect on enrollments."""
import pytest

from api.models.models import Course, Enrollment, LessonCompletion
from api.utils.errors import CourseNotFound, DuplicateLessonOrder, LessonNotFound, QuestionNotFound

L1, L2 = "test-course-123-l1", "test-course-123-l2"


def _course_data(**overrides):
    data = {
        "title": "Intro to NLP",
        "description": "Tokens, embeddings and transformers",
        "category": "nlp",
        "difficulty": "intermediate",
        "is_published": True,
    }
    data.update(overrides)
    return data


@pytest.mark.unit
class TestListing:
    def test_hides_drafts(self, catalog, test_course, draft_course):
        courses, total = catalog.list_courses()
        assert total == 1
        assert [c.id for c in courses] == [test_course.id]

    def test_include_drafts(self, catalog, test_course, draft_course):
        _, total = catalog.list_courses(include_drafts=True)
        assert total == 2

    def test_filters(self, catalog, test_course):
        catalog.create_course(_course_data(), creator_id=None)
        courses, total = catalog.list_courses(category="nlp")
        assert total == 1 and courses[0].title == "Intro to NLP"
        _, total = catalog.list_courses(difficulty="beginner")
        assert total == 1
        courses, _ = catalog.list_courses(search="transformers")
        assert [c.title for c in courses] == ["Intro to NLP"]

    def test_pagination(self, catalog, course_factory):
        for i in range(5):
            course_factory(f"c{i}")
        courses, total = catalog.list_courses(page=2, limit=2)
        assert total == 5
        assert len(courses) == 2

    def test_featured_and_categories(self, catalog, test_course):
        catalog.create_course(_course_data(is_featured=True), creator_id=None)
        assert [c.title for c in catalog.featured()] == ["Intro to NLP"]
        assert dict(catalog.categories()) == {"machine-learning": 1, "nlp": 1}

    def test_require_missing(self, catalog):
        with pytest.raises(CourseNotFound):
            catalog.require("missing")


@pytest.mark.unit
class TestCourseAdmin:
    def test_create_and_update(self, catalog):
        course = catalog.create_course(_course_data(tags=["nlp"]), creator_id=None)
        assert course.instructor_name == "AI Super Hub"
        assert course.enrollment_count == 0
        updated = catalog.update_course(course.id, {"title": "NLP Basics", "is_featured": True})
        assert updated.title == "NLP Basics"
        assert updated.is_featured is True

    def test_update_ignores_null_for_required_fields(self, catalog, test_course):
        updated = catalog.update_course(
            test_course.id, {"title": None, "is_published": None, "short_description": "Short"}
        )
        assert updated.title == "Machine Learning Fundamentals"
        assert updated.is_published is True
        assert updated.short_description == "Short"
        cleared = catalog.update_course(test_course.id, {"short_description": None})
        assert cleared.short_description is None

    def test_delete_cascades_to_enrollments(self, db_session, catalog, enrollment_service, test_user, test_course):
        enrollment_service.enroll(test_user.id, test_course.id)
        enrollment_service.complete_lesson(test_user.id, test_course.id, L1)
        removed = catalog.delete_course(test_course.id)
        assert removed == 1
        assert db_session.query(Course).count() == 0
        assert db_session.query(Enrollment).count() == 0
        assert db_session.query(LessonCompletion).count() == 0


@pytest.mark.unit
class TestLessonAdmin:
    def test_add_appends_and_updates_duration(self, catalog, test_course):
        lesson = catalog.add_lesson(test_course.id, {"title": "Extra", "content": "...", "duration": 15})
        assert lesson.order_index == 3
        assert catalog.require(test_course.id).duration == 75

    def test_add_duplicate_order(self, catalog, test_course):
        with pytest.raises(DuplicateLessonOrder):
            catalog.add_lesson(test_course.id, {"title": "Clash", "content": "...", "order_index": 1})

    def test_add_lowers_progress(self, catalog, enrollment_service, test_user, test_course):
        enrollment_service.enroll(test_user.id, test_course.id)
        enrollment_service.complete_lesson(test_user.id, test_course.id, L1)
        enrollment_service.complete_lesson(test_user.id, test_course.id, L2)
        catalog.add_lesson(test_course.id, {"title": "Extra", "content": "..."})
        e = enrollment_service.get_enrollment(test_user.id, test_course.id)
        assert (e.progress, e.status) == (67, "in-progress")
        assert e.lessons_completed_at is not None

    def test_delete_drops_completions(self, catalog, enrollment_service, test_user, test_course):
        enrollment_service.enroll(test_user.id, test_course.id)
        enrollment_service.complete_lesson(test_user.id, test_course.id, L1)
        catalog.delete_lesson(test_course.id, L1)
        e = enrollment_service.get_enrollment(test_user.id, test_course.id)
        assert e.completed_lessons == []
        assert (e.progress, e.status) == (0, "enrolled")

    def test_add_after_delete_takes_next_free_order(self, catalog, test_course):
        third = catalog.add_lesson(test_course.id, {"title": "Third", "content": "..."})
        catalog.delete_lesson(test_course.id, L2)
        lesson = catalog.add_lesson(test_course.id, {"title": "Fourth", "content": "..."})
        assert lesson.order_index == third.order_index + 1
        assert [l.order_index for l in catalog.require(test_course.id).lessons] == [1, 3, 4]

    def test_delete_unknown(self, catalog, test_course):
        with pytest.raises(LessonNotFound):
            catalog.delete_lesson(test_course.id, "nope")

    def test_update_fields(self, catalog, test_course):
        lesson = catalog.update_lesson(test_course.id, L1, {"title": "Renamed", "duration": 10})
        assert lesson.title == "Renamed"
        assert catalog.require(test_course.id).duration == 40


@pytest.mark.unit
class TestQuizAdmin:
    def test_add_questions_continues_order(self, catalog, test_course):
        added = catalog.add_questions(
            test_course.id,
            [{"question": "Third?", "options": ["x", "y"], "correct_answer": 1}],
        )
        assert [q.order_index for q in added] == [3]
        assert len(catalog.require(test_course.id).quiz) == 3

    def test_delete_question(self, catalog, test_course):
        catalog.delete_question(test_course.id, "test-course-123-q1")
        assert [q.id for q in catalog.require(test_course.id).quiz] == ["test-course-123-q2"]

    def test_delete_unknown_question(self, catalog, test_course):
        with pytest.raises(QuestionNotFound):
            catalog.delete_question(test_course.id, "nope")
