"""
Enrollment schemas.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from app.schemas.common import ORMModel, UserSummary, InstructorBrief


class EnrollmentCourse(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    price: float
    instructor: Optional[InstructorBrief] = None


class EnrollmentBase(ORMModel):
    id: int
    user_id: int
    course_id: int
    enrolled_at: datetime


class EnrollmentOut(EnrollmentBase):
    """An enrollment as seen by the enrolled student."""
    course: EnrollmentCourse


class CourseEnrollmentEntry(EnrollmentBase):
    """An enrollment as seen from its course."""
    user: UserSummary


class EnrollmentRecord(EnrollmentBase):
    user: UserSummary
    course: EnrollmentCourse


class EnrollmentResponse(BaseModel):
    message: str
    enrollment: EnrollmentOut


class EnrollmentListResponse(BaseModel):
    message: str
    enrollments: List[EnrollmentOut]


class EnrollmentRecordListResponse(BaseModel):
    message: str
    enrollments: List[EnrollmentRecord]


class CourseEnrollmentListResponse(BaseModel):
    message: str
    enrollments: List[CourseEnrollmentEntry]
    count: int
