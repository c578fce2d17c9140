"""
User schemas.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole
from app.schemas.common import ORMModel, CourseBrief


class UserPublic(ORMModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None


class UserListItem(UserPublic):
    updated_at: Optional[datetime] = None
    course_count: int
    enrollment_count: int


class UserEnrollmentEntry(ORMModel):
    id: int
    enrolled_at: datetime
    course: CourseBrief


class UserDetail(UserPublic):
    updated_at: Optional[datetime] = None
    created_courses: List[CourseBrief] = []
    enrollments: List[UserEnrollmentEntry] = []


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None


class UserStats(BaseModel):
    course_count: int
    enrollment_count: int


class UserResponse(BaseModel):
    message: str
    user: UserPublic


class UserDetailResponse(BaseModel):
    message: str
    user: UserDetail


class UserListResponse(BaseModel):
    message: str
    users: List[UserListItem]


class UserStatsResponse(BaseModel):
    message: str
    stats: UserStats
