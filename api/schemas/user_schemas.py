from pydantic import BaseModel, Field
from typing import Optional


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
    preferences: Optional[dict] = None


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    preferences: Optional[dict] = None


class UpdatePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8)
    confirm_new_password: str


class DeleteAccountResponse(BaseModel):
    message: str
    enrollments_removed: int


class LearningStatsResponse(BaseModel):
    """Profile card numbers across all of the user's enrollments."""
    enrollments_count: int
    completed_courses: int
    certificates: int
    learning_hours: float
