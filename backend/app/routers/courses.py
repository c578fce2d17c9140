"""
Courses router for Clipper LMS.

Every route requires a bearer token. Creating requires the INSTRUCTOR role;
updating and deleting require ownership or ADMIN.
"""

from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.routers.auth import get_current_identity
from app.schemas.auth import Identity
from app.schemas.common import MessageResponse
from app.schemas.course import (
    CourseCreate,
    CourseUpdate,
    CourseOut,
    CourseDetail,
    CourseResponse,
    CourseDetailResponse,
    CourseListResponse,
)
from app.services.courses import CourseRegistry


router = APIRouter()


def get_course_registry(db: Session = Depends(get_db)) -> CourseRegistry:
    return CourseRegistry(db)


@router.get("", response_model=CourseListResponse)
def list_courses(
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, Any]:
    """
    List every course, newest first, with instructor and enrollment count.
    """
    courses = registry.list()
    return {
        "message": "Courses retrieved successfully",
        "courses": [CourseOut.model_validate(course) for course in courses],
    }


@router.get("/my-courses", response_model=CourseListResponse)
def list_my_courses(
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, Any]:
    """
    List the courses owned by the calling instructor.
    """
    courses = registry.list_owned(identity)
    return {
        "message": "Instructor courses retrieved successfully",
        "courses": [CourseOut.model_validate(course) for course in courses],
    }


@router.get("/{course_id}", response_model=CourseDetailResponse)
def get_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, Any]:
    """
    Get a course with its instructor and enrolled students.
    """
    course = registry.get(course_id)
    return {
        "message": "Course retrieved successfully",
        "course": CourseDetail.model_validate(course),
    }


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    course_data: CourseCreate,
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, Any]:
    """
    Create a course owned by the calling instructor.
    """
    course = registry.create(
        identity,
        title=course_data.title,
        price=course_data.price,
        description=course_data.description,
    )
    return {
        "message": "Course created successfully",
        "course": CourseOut.model_validate(course),
    }


@router.put("/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: int,
    course_update: CourseUpdate,
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, Any]:
    """
    Update the supplied fields of a course (owner or admin).
    """
    course = registry.update(identity, course_id, course_update.model_dump(exclude_unset=True))
    return {
        "message": "Course updated successfully",
        "course": CourseOut.model_validate(course),
    }


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    registry: CourseRegistry = Depends(get_course_registry)
) -> Dict[str, str]:
    """
    Delete a course and its enrollments (owner or admin).
    """
    registry.delete(identity, course_id)
    return {"message": "Course deleted successfully"}
