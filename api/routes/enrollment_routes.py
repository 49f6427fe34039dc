"""
Learner endpoints: enroll, track lessons, take the quiz.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import User
from api.schemas.enrollment_schemas import (
    AnswerReview,
    CompleteLessonResponse,
    EnrollmentResponse,
    MyCoursesResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from api.services.enrollment_service import EnrollmentService
from api.utils.auth import get_current_user
from api.utils.common import enrollment_response, my_course_item
from api.utils.errors import NotEnrolled

enrollment_routes = APIRouter()


@enrollment_routes.get("/courses/my-courses", response_model=MyCoursesResponse)
async def my_courses(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MyCoursesResponse:
    """Enrollments of the current user, most recently accessed first."""
    enrollments = EnrollmentService(db).list_my_enrollments(int(current_user.id))
    return MyCoursesResponse(enrollments=[my_course_item(e) for e in enrollments if e.course is not None])


@enrollment_routes.post("/courses/{course_id}/enroll", response_model=EnrollmentResponse, status_code=201)
async def enroll(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EnrollmentResponse:
    enrollment = EnrollmentService(db).enroll(int(current_user.id), course_id)
    return enrollment_response(enrollment)


@enrollment_routes.get("/courses/{course_id}/enrollment", response_model=EnrollmentResponse)
async def get_enrollment(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EnrollmentResponse:
    enrollment = EnrollmentService(db).get_enrollment(int(current_user.id), course_id)
    if enrollment is None:
        raise NotEnrolled()
    return enrollment_response(enrollment)


@enrollment_routes.post("/courses/{course_id}/lessons/{lesson_id}/complete", response_model=CompleteLessonResponse)
async def complete_lesson(
    course_id: str,
    lesson_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CompleteLessonResponse:
    """Mark a lesson complete. Completing it again is a no-op."""
    enrollment = EnrollmentService(db).complete_lesson(int(current_user.id), course_id, lesson_id)
    return CompleteLessonResponse(enrollment=enrollment_response(enrollment), progress=int(enrollment.progress))


@enrollment_routes.post("/courses/{course_id}/quiz/submit", response_model=SubmitQuizResponse)
async def submit_quiz(
    course_id: str,
    req: SubmitQuizRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SubmitQuizResponse:
    result = EnrollmentService(db).submit_quiz(
        int(current_user.id),
        course_id,
        [(a.question_id, a.selected_answer) for a in req.answers],
    )
    grade = result.grade
    return SubmitQuizResponse(
        score=grade.score,
        total_questions=grade.total_questions,
        percentage=grade.percentage,
        passed=grade.passed,
        answers=[AnswerReview(**a.as_dict()) for a in grade.answers],
        certificate_issued=result.certificate_issued,
        course_completed=result.course_completed,
    )
