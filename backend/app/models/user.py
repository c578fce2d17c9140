"""
User model for Clipper LMS.

Defines the User table with authentication fields, the role used for
authorization, and relationships to owned courses and enrollments.
"""

from datetime import datetime
from typing import Optional, List
from enum import Enum
from sqlalchemy import Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class UserRole(str, Enum):
    """Roles a user can hold."""
    ADMIN = "ADMIN"
    INSTRUCTOR = "INSTRUCTOR"
    STUDENT = "STUDENT"


class User(Base):
    """
    User model for authentication and profile management.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Authentication fields
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile fields
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.STUDENT.value,
        nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Relationships
    created_courses: Mapped[List["Course"]] = relationship(
        "Course",
        back_populates="instructor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    enrollments: Mapped[List["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint("role IN ('ADMIN', 'INSTRUCTOR', 'STUDENT')", name="check_user_role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def course_count(self) -> int:
        return len(self.created_courses)

    @property
    def enrollment_count(self) -> int:
        return len(self.enrollments)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
