"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.exceptions import AuthenticationError
from tuitionboard.core.security import verify_session_token
from tuitionboard.models.tuition import Tuition
from tuitionboard.models.user import User
from tuitionboard.services.auth import AuthService
from tuitionboard.services.tuition import TuitionService


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    authorization: str = Header(..., description="Bearer token from the identity provider"),
) -> User:
    """Extract and validate the current tutor from the provider JWT."""
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    token = authorization[7:]  # Remove "Bearer " prefix
    claims = verify_session_token(token)

    if not claims:
        raise AuthenticationError("Invalid or expired token")

    return AuthService(db).resolve_user(claims)


def get_owned_tuition(
    tuition_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> Tuition:
    """Resolve the ``tuition_id`` path parameter to one of the tutor's tuitions."""
    return TuitionService(db).get_tuition(user.id, tuition_id)


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
OwnedTuition = Annotated[Tuition, Depends(get_owned_tuition)]
