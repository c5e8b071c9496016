"""Current tutor endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import CurrentUser
from tuitionboard.schemas.auth import UserResponse, UserUpdate
from tuitionboard.services.auth import AuthService

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: CurrentUser):
    """
    Get the signed-in tutor.
    The first call for a new identity creates the local profile.
    """
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_current_user(
    request: UserUpdate,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Update the signed-in tutor's name or phone."""
    service = AuthService(db)
    return service.update_profile(current_user, request)
