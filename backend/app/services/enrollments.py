"""
Enrollment ledger: student membership in courses.

Uniqueness of a (student, course) pair is decided by the database's unique
constraint on the INSERT itself, never by a prior read, so two concurrent
``enroll`` calls for the same pair cannot both succeed.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import AlreadyEnrolled, NotFound
from app.core.security import require_owner_or_admin, require_role
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.user import User, UserRole
from app.schemas.auth import Identity


logger = logging.getLogger(__name__)


class EnrollmentLedger:
    """
    Records, removes and lists enrollments.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_course_or_404(self, course_id: int) -> Course:
        course = self.db.get(Course, course_id)
        if course is None:
            raise NotFound("Course not found")
        return course

    def _pair_exists(self, user_id: int, course_id: int) -> bool:
        return (
            self.db.query(Enrollment.id)
            .filter(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
            .first()
            is not None
        )

    def enroll(self, identity: Identity, course_id: int) -> Enrollment:
        require_role(identity, UserRole.STUDENT, message="Forbidden: Only students can enroll in courses")
        self._get_course_or_404(course_id)

        enrollment = Enrollment(user_id=identity.id, course_id=course_id)
        self.db.add(enrollment)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # The constraint already decided; only classify the failure
            if self._pair_exists(identity.id, course_id):
                logger.info(f"Duplicate enrollment rejected: user id={identity.id} course id={course_id}")
                raise AlreadyEnrolled() from exc
            if self.db.get(Course, course_id) is None:
                raise NotFound("Course not found") from exc
            if self.db.get(User, identity.id) is None:
                raise NotFound("User not found") from exc
            raise

        self.db.refresh(enrollment)
        logger.info(f"Enrolled: user id={identity.id} course id={course_id}")
        return enrollment

    def unenroll(self, identity: Identity, course_id: int) -> None:
        require_role(identity, UserRole.STUDENT, message="Forbidden: Student access required")

        deleted = (
            self.db.query(Enrollment)
            .filter(Enrollment.user_id == identity.id, Enrollment.course_id == course_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if not deleted:
            raise NotFound("Enrollment not found")
        logger.info(f"Unenrolled: user id={identity.id} course id={course_id}")

    def list_mine(self, identity: Identity) -> List[Enrollment]:
        require_role(identity, UserRole.STUDENT, message="Forbidden: Student access required")
        return (
            self.db.query(Enrollment)
            .options(joinedload(Enrollment.course).joinedload(Course.instructor))
            .filter(Enrollment.user_id == identity.id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
            .all()
        )

    def list_for_course(self, identity: Identity, course_id: int) -> List[Enrollment]:
        course = self._get_course_or_404(course_id)
        require_owner_or_admin(
            identity,
            course.instructor_id,
            message="Forbidden: You can only view enrollments for your own courses",
        )
        return (
            self.db.query(Enrollment)
            .options(joinedload(Enrollment.user))
            .filter(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
            .all()
        )

    def list_all(self, identity: Identity) -> List[Enrollment]:
        """
        Admins see every enrollment; instructors only those on their courses.
        """
        require_role(identity, UserRole.ADMIN, UserRole.INSTRUCTOR, message="Forbidden: Access denied")

        query = self.db.query(Enrollment).options(
            joinedload(Enrollment.user),
            joinedload(Enrollment.course).joinedload(Course.instructor),
        )
        if identity.role == UserRole.INSTRUCTOR:
            query = query.join(Enrollment.course).filter(Course.instructor_id == identity.id)

        return query.order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc()).all()
