"""
User services: registration and login (``CredentialStore``) and
account management (``UserDirectory``).
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.config import Settings, settings
from app.core.exceptions import (
    DuplicateEmail, InvalidCredentials, InvalidInput, NotFound
)
from app.core.security import (
    create_access_token,
    get_password_hash,
    identity_from_user,
    pwd_context,
    require_owner_or_admin,
    require_role,
    verify_password,
)
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User, UserRole
from app.schemas.auth import Identity


logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Persists user credentials and exchanges them for access tokens.
    """

    def __init__(self, db: Session, app_settings: Optional[Settings] = None):
        self.db = db
        self.settings = app_settings or settings

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> User:
        """
        Create a user account. Role defaults to STUDENT.

        The up-front lookup gives the common case a clean error; the unique
        index on ``email`` settles concurrent registrations.
        """
        if self.get_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(
            email=email,
            hashed_password=get_password_hash(password, self.settings),
            name=name,
            role=UserRole(role or UserRole.STUDENT).value,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmail() from exc

        self.db.refresh(user)
        logger.info(f"User registered: id={user.id} role={user.role}")
        return user

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password fail identically.
        """
        user = self.get_by_email(email)
        if user is None:
            # Spend the same hashing time as a real check
            pwd_context.dummy_verify()
            logger.warning("Failed login attempt for unknown account")
            raise InvalidCredentials()

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for user id={user.id}")
            raise InvalidCredentials()

        token = create_access_token(identity_from_user(user), app_settings=self.settings)
        return user, token


class UserDirectory:
    """
    Self-service and admin management of user accounts.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def list_all(self, identity: Identity) -> List[User]:
        require_role(identity, UserRole.ADMIN, message="Forbidden: Admin access required")
        return (
            self.db.query(User)
            .options(selectinload(User.created_courses), selectinload(User.enrollments))
            .order_by(User.id)
            .all()
        )

    def get(self, identity: Identity, user_id: int) -> User:
        require_owner_or_admin(identity, user_id, message="Forbidden: Access denied")
        user = (
            self.db.query(User)
            .options(
                selectinload(User.created_courses),
                selectinload(User.enrollments).joinedload(Enrollment.course),
            )
            .filter(User.id == user_id)
            .first()
        )
        if user is None:
            raise NotFound("User not found")
        return user

    def update(
        self,
        identity: Identity,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        require_owner_or_admin(identity, user_id, message="Forbidden: Access denied")
        if not name and not email:
            raise InvalidInput("At least one field (name or email) must be provided")

        user = self._get_or_404(user_id)
        if name:
            user.name = name
        if email:
            user.email = email

        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmail("Email already exists") from exc

        self.db.refresh(user)
        logger.info(f"User updated: id={user.id} by user id={identity.id}")
        return user

    def delete(self, identity: Identity, user_id: int) -> None:
        """
        Delete an account together with its courses and enrollments.
        """
        require_role(identity, UserRole.ADMIN, message="Forbidden: Admin access required")
        if identity.id == user_id:
            raise InvalidInput("Cannot delete your own account")

        user = self._get_or_404(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"User deleted: id={user_id} by admin id={identity.id}")

    def stats(self, identity: Identity) -> dict:
        if self.db.get(User, identity.id) is None:
            raise NotFound("User not found")

        course_count = (
            self.db.query(func.count(Course.id))
            .filter(Course.instructor_id == identity.id)
            .scalar()
        )
        enrollment_count = (
            self.db.query(func.count(Enrollment.id))
            .filter(Enrollment.user_id == identity.id)
            .scalar()
        )
        return {
            "course_count": course_count or 0,
            "enrollment_count": enrollment_count or 0,
        }
