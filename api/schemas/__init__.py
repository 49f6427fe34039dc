"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import CourseResponse, SubmitQuizRequest
    from api.schemas.enrollment_schemas import EnrollmentResponse
"""

from api.schemas.auth_schemas import (
    AuthTokenPayload,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
)
from api.schemas.user_schemas import (
    UserResponse,
    UpdateProfileRequest,
    UpdatePasswordRequest,
    DeleteAccountResponse,
    LearningStatsResponse,
)
from api.schemas.course_schemas import (
    CreateCourseRequest,
    UpdateCourseRequest,
    LessonRequest,
    UpdateLessonRequest,
    QuizQuestionRequest,
    AddQuizRequest,
    LessonResponse,
    QuizQuestionResponse,
    CourseSummary,
    CourseResponse,
    Pagination,
    CourseListResponse,
    FeaturedCoursesResponse,
    CategoryCount,
    CategoriesResponse,
    AddQuizResponse,
    DeleteCourseResponse,
)
from api.schemas.enrollment_schemas import (
    LessonCompletionResponse,
    AnswerReview,
    QuizAttemptResponse,
    EnrollmentResponse,
    CompleteLessonResponse,
    QuizAnswer,
    SubmitQuizRequest,
    SubmitQuizResponse,
    MyCourseSummary,
    MyCourseItem,
    MyCoursesResponse,
    CourseDetailResponse,
)

__all__ = [
    # auth
    "AuthTokenPayload",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    # user
    "UserResponse",
    "UpdateProfileRequest",
    "UpdatePasswordRequest",
    "DeleteAccountResponse",
    "LearningStatsResponse",
    # course
    "CreateCourseRequest",
    "UpdateCourseRequest",
    "LessonRequest",
    "UpdateLessonRequest",
    "QuizQuestionRequest",
    "AddQuizRequest",
    "LessonResponse",
    "QuizQuestionResponse",
    "CourseSummary",
    "CourseResponse",
    "Pagination",
    "CourseListResponse",
    "FeaturedCoursesResponse",
    "CategoryCount",
    "CategoriesResponse",
    "AddQuizResponse",
    "DeleteCourseResponse",
    # enrollment
    "LessonCompletionResponse",
    "AnswerReview",
    "QuizAttemptResponse",
    "EnrollmentResponse",
    "CompleteLessonResponse",
    "QuizAnswer",
    "SubmitQuizRequest",
    "SubmitQuizResponse",
    "MyCourseSummary",
    "MyCourseItem",
    "MyCoursesResponse",
    "CourseDetailResponse",
]
