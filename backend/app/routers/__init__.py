"""
API routers for Clipper LMS.

This module contains all API endpoint routers:
- auth: Registration, login and the bearer-token dependency
- users: Account management
- courses: Course CRUD
- enrollments: Student enrollments
"""

from fastapi import APIRouter

# Import individual routers
from .auth import router as auth_router
from .users import router as users_router
from .courses import router as courses_router
from .enrollments import router as enrollments_router

# Create main API router
api_router = APIRouter()

# Include all routers with their prefixes
api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["auth"]
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["courses"]
)

api_router.include_router(
    enrollments_router,
    prefix="/enrollments",
    tags=["enrollments"]
)

# Export all routers
__all__ = [
    "api_router",
    "auth_router",
    "users_router",
    "courses_router",
    "enrollments_router"
]
