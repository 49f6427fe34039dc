"""
Course catalog endpoints: public browsing and admin editing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import User
from api.schemas.course_schemas import (
    AddQuizRequest,
    AddQuizResponse,
    CategoriesResponse,
    CategoryCount,
    CourseListResponse,
    CourseResponse,
    CreateCourseRequest,
    DeleteCourseResponse,
    Difficulty,
    Category,
    FeaturedCoursesResponse,
    LessonRequest,
    LessonResponse,
    UpdateCourseRequest,
    UpdateLessonRequest,
)
from api.schemas.enrollment_schemas import CourseDetailResponse
from api.services.course_catalog import CourseCatalog
from api.services.enrollment_store import EnrollmentStore
from api.utils.auth import get_optional_user, is_admin, require_admin
from api.utils.common import course_response, course_summary, enrollment_response, lesson_response, paginate, quiz_question_response
from api.utils.errors import CourseNotFound

course_routes = APIRouter()


@course_routes.get("/courses", response_model=CourseListResponse)
async def list_courses(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    category: Optional[Category] = None,
    difficulty: Optional[Difficulty] = None,
    search: Optional[str] = None,
    featured: bool = False,
    sort: str = "-created_at",
    show_all: bool = False,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> CourseListResponse:
    """Published courses; admins can pass show_all=true to include drafts."""
    courses, total = CourseCatalog(db).list_courses(
        category=category,
        difficulty=difficulty,
        search=search,
        featured=featured,
        include_drafts=show_all and is_admin(current_user),
        sort=sort,
        page=page,
        limit=limit,
    )
    return CourseListResponse(
        courses=[course_summary(c) for c in courses],
        pagination=paginate(page, limit, total),
    )


@course_routes.get("/courses/featured", response_model=FeaturedCoursesResponse)
async def featured_courses(db: Session = Depends(get_db)) -> FeaturedCoursesResponse:
    return FeaturedCoursesResponse(courses=[course_summary(c) for c in CourseCatalog(db).featured()])


@course_routes.get("/courses/categories", response_model=CategoriesResponse)
async def course_categories(db: Session = Depends(get_db)) -> CategoriesResponse:
    return CategoriesResponse(
        categories=[CategoryCount(category=cat, count=n) for cat, n in CourseCatalog(db).categories()]
    )


@course_routes.get("/courses/{course_id}", response_model=CourseDetailResponse)
async def get_course(
    course_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> CourseDetailResponse:
    """Course with lessons and quiz, plus the caller's enrollment when logged in."""
    course = CourseCatalog(db).require(course_id)
    admin = is_admin(current_user)
    if not course.is_published and not admin:
        raise CourseNotFound()
    enrollment = None
    if current_user is not None:
        enrollment = EnrollmentStore(db).find_for(int(current_user.id), course.id)
    return CourseDetailResponse(
        course=course_response(course, with_answers=admin),
        enrollment=enrollment_response(enrollment) if enrollment else None,
        is_enrolled=enrollment is not None,
    )


# ---- admin ----

@course_routes.post("/courses", response_model=CourseResponse, status_code=201)
async def create_course(
    req: CreateCourseRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CourseResponse:
    course = CourseCatalog(db).create_course(req.model_dump(), creator_id=int(admin.id))
    return course_response(course, with_answers=True)


@course_routes.put("/courses/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: str,
    req: UpdateCourseRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> CourseResponse:
    course = CourseCatalog(db).update_course(course_id, req.model_dump(exclude_unset=True))
    return course_response(course, with_answers=True)


@course_routes.delete("/courses/{course_id}", response_model=DeleteCourseResponse)
async def delete_course(
    course_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> DeleteCourseResponse:
    """Deletes the course and every enrollment in it."""
    removed = CourseCatalog(db).delete_course(course_id)
    return DeleteCourseResponse(course_id=course_id, enrollments_removed=removed)


@course_routes.post("/courses/{course_id}/lessons", response_model=LessonResponse, status_code=201)
async def add_lesson(
    course_id: str,
    req: LessonRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> LessonResponse:
    lesson = CourseCatalog(db).add_lesson(course_id, req.model_dump())
    return lesson_response(lesson)


@course_routes.put("/courses/{course_id}/lessons/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    course_id: str,
    lesson_id: str,
    req: UpdateLessonRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> LessonResponse:
    lesson = CourseCatalog(db).update_lesson(course_id, lesson_id, req.model_dump(exclude_unset=True))
    return lesson_response(lesson)


@course_routes.delete("/courses/{course_id}/lessons/{lesson_id}")
async def delete_lesson(
    course_id: str,
    lesson_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    CourseCatalog(db).delete_lesson(course_id, lesson_id)
    return {"message": "Lesson deleted"}


@course_routes.post("/courses/{course_id}/quiz", response_model=AddQuizResponse, status_code=201)
async def add_quiz_questions(
    course_id: str,
    req: AddQuizRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> AddQuizResponse:
    added = CourseCatalog(db).add_questions(course_id, [q.model_dump() for q in req.questions])
    return AddQuizResponse(
        course_id=course_id,
        added=[quiz_question_response(q, with_answer=True) for q in added],
    )


@course_routes.delete("/courses/{course_id}/quiz/{question_id}")
async def delete_quiz_question(
    course_id: str,
    question_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    CourseCatalog(db).delete_question(course_id, question_id)
    return {"message": "Quiz question deleted"}
