"""Tutor identity service."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitionboard.core.config import settings
from tuitionboard.core.exceptions import AuthenticationError, PermissionDeniedError
from tuitionboard.core.security import display_name
from tuitionboard.models.user import User, UserRole
from tuitionboard.schemas.auth import UserUpdate

logger = logging.getLogger(__name__)


class AuthService:
    """Maps identity-provider subjects onto local tutor rows."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_external_id(self, external_id: str) -> User | None:
        result = self.db.execute(select(User).where(User.external_id == external_id))
        return result.scalar_one_or_none()

    def resolve_user(self, claims: dict[str, Any]) -> User:
        """Return the tutor for verified token claims, creating it on first sight."""
        external_id = str(claims["sub"])
        user = self.get_by_external_id(external_id)

        if not user:
            if not settings.AUTO_PROVISION_TUTORS:
                raise AuthenticationError("User not found")
            user = User(
                external_id=external_id,
                email=claims.get("email") or "",
                name=display_name(claims),
                role=UserRole.TUTOR,
                is_active=True,
            )
            self.db.add(user)
            self.db.flush()
            self.db.refresh(user)
            logger.info(f"Provisioned tutor {user.id} for subject {external_id}")

        if not user.is_active:
            raise PermissionDeniedError("User account is deactivated")
        return user

    def update_profile(self, user: User, request: UserUpdate) -> User:
        """Update the editable parts of the tutor profile."""
        update_data = request.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if field == "name" and not value:
                continue
            setattr(user, field, value)
        self.db.flush()
        self.db.refresh(user)
        return user
