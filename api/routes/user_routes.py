"""
Profile, password, account deletion and learning stats for the current user.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import User
from api.schemas.user_schemas import (
    DeleteAccountResponse,
    LearningStatsResponse,
    UpdatePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from api.services.account_service import AccountService
from api.utils.auth import clear_auth_cookie, get_current_user
from api.utils.common import user_response
from api.utils.jwt import get_password_hash, verify_password

user_routes = APIRouter()


@user_routes.patch("/users/me", response_model=UserResponse)
async def update_profile(
    body: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """
    Update name and merge preferences into the existing ones.
    Use e.g. { "preferences": { "theme": "dark" } }.
    """
    if body.name is not None:
        current_user.name = body.name.strip()
    if body.preferences is not None:
        current = current_user.preferences if isinstance(current_user.preferences, dict) else {}
        current_user.preferences = {**current, **body.preferences}
    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return user_response(current_user)


@user_routes.patch("/users/me/password")
async def update_password(
    body: UpdatePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Requires the current password and a confirmation of the new one."""
    if body.new_password != body.confirm_new_password:
        raise HTTPException(status_code=400, detail="New password and confirmation do not match")
    if not verify_password(body.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    current_user.hashed_password = get_password_hash(body.new_password)
    db.add(current_user)
    db.commit()
    return {"message": "Password updated"}


@user_routes.delete("/users/me", response_model=DeleteAccountResponse)
async def delete_account(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> DeleteAccountResponse:
    """Delete the account together with every enrollment it owns."""
    removed = AccountService(db).delete_account(current_user)
    clear_auth_cookie(response)
    return DeleteAccountResponse(message="Account deleted", enrollments_removed=removed)


@user_routes.get("/users/me/stats", response_model=LearningStatsResponse)
async def get_learning_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> LearningStatsResponse:
    stats = AccountService(db).learning_stats(int(current_user.id))
    return LearningStatsResponse(
        enrollments_count=stats.enrollments_count,
        completed_courses=stats.completed_courses,
        certificates=stats.certificates,
        learning_hours=stats.learning_hours,
    )
