"""
Course registry: CRUD over instructor-owned courses.
"""

import logging
import math
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.exceptions import InvalidInput, NotFound
from app.core.security import require_owner_or_admin, require_role
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import UserRole
from app.schemas.auth import Identity


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "price")


def validate_price(price: Any) -> float:
    """Return ``price`` as a float, rejecting missing, negative or non-finite values."""
    if price is None or isinstance(price, bool):
        raise InvalidInput("Price must be a non-negative number")
    try:
        value = float(price)
    except (TypeError, ValueError) as exc:
        raise InvalidInput("Price must be a non-negative number") from exc
    if not math.isfinite(value) or value < 0:
        raise InvalidInput("Price must be a non-negative number")
    return value


class CourseRegistry:
    """
    Creates, reads, updates and deletes courses.

    Mutations check existence first, then ownership, then input, and commit
    once at the end.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_or_404(self, course_id: int) -> Course:
        course = self.db.get(Course, course_id)
        if course is None:
            raise NotFound("Course not found")
        return course

    def list(self) -> List[Course]:
        return (
            self.db.query(Course)
            .options(joinedload(Course.instructor), selectinload(Course.enrollments))
            .order_by(Course.created_at.desc(), Course.id.desc())
            .all()
        )

    def get(self, course_id: int) -> Course:
        course = (
            self.db.query(Course)
            .options(
                joinedload(Course.instructor),
                selectinload(Course.enrollments).joinedload(Enrollment.user),
            )
            .filter(Course.id == course_id)
            .first()
        )
        if course is None:
            raise NotFound("Course not found")
        return course

    def list_owned(self, identity: Identity) -> List[Course]:
        require_role(identity, UserRole.INSTRUCTOR, message="Forbidden: Instructor access required")
        return (
            self.db.query(Course)
            .options(joinedload(Course.instructor), selectinload(Course.enrollments))
            .filter(Course.instructor_id == identity.id)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .all()
        )

    def create(
        self,
        identity: Identity,
        title: Optional[str],
        price: Any,
        description: Optional[str] = None,
    ) -> Course:
        require_role(identity, UserRole.INSTRUCTOR, message="Forbidden: Only instructors can create courses")

        if not title or not title.strip() or price is None:
            raise InvalidInput("Title and price are required")

        course = Course(
            title=title.strip(),
            description=description,
            price=validate_price(price),
            instructor_id=identity.id,
        )
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        logger.info(f"Course created: id={course.id} by instructor id={identity.id}")
        return course

    def update(self, identity: Identity, course_id: int, patch: Mapping[str, Any]) -> Course:
        """
        Apply the supplied fields of ``patch`` to a course.

        Only keys present in ``patch`` are touched; ``description`` may be
        cleared with ``None``.
        """
        course = self.get_or_404(course_id)
        require_owner_or_admin(
            identity,
            course.instructor_id,
            message="Forbidden: You can only update your own courses",
        )

        changes = {field: patch[field] for field in UPDATABLE_FIELDS if field in patch}
        if not changes:
            raise InvalidInput("At least one field must be provided")

        if "title" in changes:
            title = changes["title"]
            if not title or not title.strip():
                raise InvalidInput("Title must not be empty")
            changes["title"] = title.strip()

        if "price" in changes:
            changes["price"] = validate_price(changes["price"])

        for field, value in changes.items():
            setattr(course, field, value)

        self.db.commit()
        self.db.refresh(course)
        logger.info(f"Course updated: id={course.id} fields={sorted(changes)} by user id={identity.id}")
        return course

    def delete(self, identity: Identity, course_id: int) -> None:
        course = self.get_or_404(course_id)
        require_owner_or_admin(
            identity,
            course.instructor_id,
            message="Forbidden: You can only delete your own courses",
        )

        self.db.delete(course)
        self.db.commit()
        logger.info(f"Course deleted: id={course_id} by user id={identity.id}")
