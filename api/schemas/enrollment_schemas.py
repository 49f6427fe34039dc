"""
Enrollment, lesson completion and quiz submission schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field

from api.schemas.course_schemas import CourseResponse


class LessonCompletionResponse(BaseModel):
    lesson_id: str
    completed_at: str


class AnswerReview(BaseModel):
    question_id: str
    selected_answer: int
    is_correct: bool


class QuizAttemptResponse(BaseModel):
    score: int
    total_questions: int
    percentage: int
    answers: list[AnswerReview]
    attempted_at: str


class EnrollmentResponse(BaseModel):
    id: str
    user_id: int
    course_id: str
    progress: int
    status: str  # enrolled|in-progress|completed
    completed_lessons: list[LessonCompletionResponse]
    quiz_attempts: list[QuizAttemptResponse]
    best_quiz_score: int
    certificate_issued: bool
    started_at: str
    last_accessed_at: str
    lessons_completed_at: Optional[str] = None
    completed_at: Optional[str] = None


class CompleteLessonResponse(BaseModel):
    enrollment: EnrollmentResponse
    progress: int


class QuizAnswer(BaseModel):
    question_id: str
    selected_answer: int = Field(ge=0)


class SubmitQuizRequest(BaseModel):
    answers: list[QuizAnswer]


class SubmitQuizResponse(BaseModel):
    score: int
    total_questions: int
    percentage: int
    passed: bool
    answers: list[AnswerReview]
    certificate_issued: bool
    course_completed: bool


class MyCourseSummary(BaseModel):
    id: str
    title: str
    short_description: Optional[str] = None
    thumbnail: str
    category: str
    difficulty: str
    duration: int
    lesson_count: int


class MyCourseItem(BaseModel):
    enrollment_id: str
    course: MyCourseSummary
    progress: int
    status: str
    completed_lessons: int
    total_lessons: int
    best_quiz_score: int
    certificate_issued: bool
    last_accessed_at: str
    completed_at: Optional[str] = None


class MyCoursesResponse(BaseModel):
    enrollments: list[MyCourseItem]


class CourseDetailResponse(BaseModel):
    course: CourseResponse
    enrollment: Optional[EnrollmentResponse] = None
    is_enrolled: bool
