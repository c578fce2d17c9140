"""
Database models for Clipper LMS.

This module contains all SQLAlchemy models for the application:
- User: accounts and roles
- Course: instructor-owned courses
- Enrollment: student membership in courses
"""

from app.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .course import Course
from .enrollment import Enrollment

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Course",
    "Enrollment",
]
