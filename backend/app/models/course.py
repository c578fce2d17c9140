"""
Course model for Clipper LMS.

A course is owned by exactly one instructor; its enrollments go with it when
it is deleted.
"""

from datetime import datetime
from typing import Optional, List
from sqlalchemy import (
    Integer, String, DateTime, Text, Float,
    ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class Course(Base):
    """
    Course model representing a purchasable learning offer.
    """
    __tablename__ = "courses"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Basic information
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Owner
    instructor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
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
    instructor = relationship("User", back_populates="created_courses")
    enrollments: Mapped[List["Enrollment"]] = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Enrollment.enrolled_at.desc()",
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_course_price_positive"),
        Index("idx_course_instructor_created", "instructor_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title='{self.title}', instructor_id={self.instructor_id})>"

    @property
    def enrollment_count(self) -> int:
        return len(self.enrollments)
