"""
Course schemas.

Create and update bodies accept every field as optional and only cap the title
at the column length: presence, role and value checks happen in
``CourseRegistry`` so that authorization is decided before input is judged.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.common import ORMModel, UserSummary
from app.schemas.enrollment import CourseEnrollmentEntry


class CourseCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = None


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = None


class CourseOut(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    price: float
    instructor_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    instructor: Optional[UserSummary] = None
    enrollment_count: int = 0


class CourseDetail(CourseOut):
    enrollments: List[CourseEnrollmentEntry] = []


class CourseResponse(BaseModel):
    message: str
    course: CourseOut


class CourseDetailResponse(BaseModel):
    message: str
    course: CourseDetail


class CourseListResponse(BaseModel):
    message: str
    courses: List[CourseOut]
