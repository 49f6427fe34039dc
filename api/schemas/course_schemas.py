"""
Course, lesson and quiz schemas.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

Category = Literal[
    "ai-fundamentals",
    "machine-learning",
    "deep-learning",
    "nlp",
    "computer-vision",
    "generative-ai",
    "ai-tools",
    "prompt-engineering",
    "ai-ethics",
    "other",
]
Difficulty = Literal["beginner", "intermediate", "advanced"]


class CreateCourseRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    short_description: Optional[str] = Field(default=None, max_length=300)
    thumbnail: Optional[str] = None
    category: Category
    difficulty: Difficulty
    tags: list[str] = []
    prerequisites: list[str] = []
    learning_outcomes: list[str] = []
    instructor_name: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class UpdateCourseRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    short_description: Optional[str] = Field(default=None, max_length=300)
    thumbnail: Optional[str] = None
    category: Optional[Category] = None
    difficulty: Optional[Difficulty] = None
    tags: Optional[list[str]] = None
    prerequisites: Optional[list[str]] = None
    learning_outcomes: Optional[list[str]] = None
    instructor_name: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None


class LessonRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    video_url: Optional[str] = None
    duration: int = Field(default=0, ge=0)  # minutes
    order_index: Optional[int] = Field(default=None, ge=1)  # appended when omitted


class UpdateLessonRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    video_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    order_index: Optional[int] = Field(default=None, ge=1)


class QuizQuestionRequest(BaseModel):
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct_answer: int = Field(ge=0)
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def _answer_in_options(self) -> "QuizQuestionRequest":
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must index into options")
        return self


class AddQuizRequest(BaseModel):
    questions: list[QuizQuestionRequest] = Field(min_length=1)


class LessonResponse(BaseModel):
    id: str
    title: str
    content: str
    video_url: str
    duration: int
    order_index: int


class QuizQuestionResponse(BaseModel):
    """Quiz question as learners see it. The answer key is only filled for admins."""
    id: str
    question: str
    options: list[str]
    order_index: int
    correct_answer: Optional[int] = None
    explanation: Optional[str] = None


class CourseSummary(BaseModel):
    id: str
    title: str
    short_description: Optional[str] = None
    thumbnail: str
    category: str
    difficulty: str
    duration: int
    lesson_count: int
    is_published: bool
    is_featured: bool
    enrollment_count: int
    created_at: str


class CourseResponse(CourseSummary):
    description: str
    tags: list[str] = []
    prerequisites: list[str] = []
    learning_outcomes: list[str] = []
    instructor_name: str
    lessons: list[LessonResponse]
    quiz: list[QuizQuestionResponse]
    updated_at: str


class Pagination(BaseModel):
    current_page: int
    items_per_page: int
    total_items: int
    total_pages: int


class CourseListResponse(BaseModel):
    courses: list[CourseSummary]
    pagination: Pagination


class FeaturedCoursesResponse(BaseModel):
    courses: list[CourseSummary]


class CategoryCount(BaseModel):
    category: str
    count: int


class CategoriesResponse(BaseModel):
    categories: list[CategoryCount]


class AddQuizResponse(BaseModel):
    course_id: str
    added: list[QuizQuestionResponse]


class DeleteCourseResponse(BaseModel):
    course_id: str
    enrollments_removed: int
