"""
Domain services for Clipper LMS.

Each service is constructed with the request's database session and raises
the errors defined in ``app.core.exceptions``.
"""

from .users import CredentialStore, UserDirectory
from .courses import CourseRegistry
from .enrollments import EnrollmentLedger

__all__ = [
    "CredentialStore",
    "UserDirectory",
    "CourseRegistry",
    "EnrollmentLedger",
]
