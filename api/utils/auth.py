from typing import Optional
from fastapi import HTTPException, Cookie, Response, status, Depends
from api.config import settings, get_db
from api.schemas.auth_schemas import AuthTokenPayload
from api.utils.jwt import verify_token, get_password_hash, create_access_token, verify_password
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from api.models.models import User
from api.utils.logger import configure_logging

logger = configure_logging()

ADMIN_ROLE = "admin"


def get_current_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> User:
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
        )

    payload = verify_token(access_token)
    if payload.sub is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    user = get_user_by_email(payload.sub, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


def get_optional_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> User | None:
    """Like get_current_user, but anonymous or stale cookies resolve to None instead of 401."""
    if not access_token:
        return None
    try:
        payload = verify_token(access_token)
    except HTTPException:
        return None
    if payload.sub is None:
        return None
    return get_user_by_email(payload.sub, db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to perform this action",
        )
    return current_user


def is_admin(user: User | None) -> bool:
    return user is not None and user.role == ADMIN_ROLE


def set_auth_cookie(response: Response, user: User) -> None:
    expires = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        AuthTokenPayload(sub=user.email, exp=datetime.now(timezone.utc) + expires, role=user.role)
    )
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=int(expires.total_seconds()),
    )

def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key="access_token",
        httponly=True,
        secure=False,
        samesite="lax"
    )


def get_user_by_email(email: str, db: Session) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()

def create_user(email: str, password: str, db: Session, name: Optional[str] = None) -> User:
    user = User(
        email=email.strip().lower(),
        name=name,
        hashed_password=get_password_hash(password),
        role="user",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user created user_id=%s", user.id)
    return user

def authenticate_user(email: str, password: str, db: Session) -> User | None:
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
