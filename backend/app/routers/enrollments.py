"""
Enrollments router for Clipper LMS.

Students enroll and unenroll themselves; admins and course owners read
enrollment lists.
"""

from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.routers.auth import get_current_identity
from app.schemas.auth import Identity
from app.schemas.common import MessageResponse
from app.schemas.enrollment import (
    EnrollmentOut,
    EnrollmentRecord,
    CourseEnrollmentEntry,
    EnrollmentResponse,
    EnrollmentListResponse,
    EnrollmentRecordListResponse,
    CourseEnrollmentListResponse,
)
from app.services.enrollments import EnrollmentLedger


router = APIRouter()


def get_enrollment_ledger(db: Session = Depends(get_db)) -> EnrollmentLedger:
    return EnrollmentLedger(db)


@router.get("", response_model=EnrollmentRecordListResponse)
def list_enrollments(
    identity: Identity = Depends(get_current_identity),
    ledger: EnrollmentLedger = Depends(get_enrollment_ledger)
) -> Dict[str, Any]:
    """
    All enrollments for admins; enrollments on owned courses for instructors.
    """
    enrollments = ledger.list_all(identity)
    return {
        "message": "Enrollments retrieved successfully",
        "enrollments": [EnrollmentRecord.model_validate(e) for e in enrollments],
    }


@router.get("/my-enrollments", response_model=EnrollmentListResponse)
def list_my_enrollments(
    identity: Identity = Depends(get_current_identity),
    ledger: EnrollmentLedger = Depends(get_enrollment_ledger)
) -> Dict[str, Any]:
    """
    The calling student's enrollments, most recent first.
    """
    enrollments = ledger.list_mine(identity)
    return {
        "message": "Enrollments retrieved successfully",
        "enrollments": [EnrollmentOut.model_validate(e) for e in enrollments],
    }


@router.get("/course/{course_id}", response_model=CourseEnrollmentListResponse)
def list_course_enrollments(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    ledger: EnrollmentLedger = Depends(get_enrollment_ledger)
) -> Dict[str, Any]:
    """
    Enrollments of one course (course owner or admin).
    """
    enrollments = ledger.list_for_course(identity, course_id)
    return {
        "message": "Course enrollments retrieved successfully",
        "enrollments": [CourseEnrollmentEntry.model_validate(e) for e in enrollments],
        "count": len(enrollments),
    }


@router.post("/enroll/{course_id}", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    ledger: EnrollmentLedger = Depends(get_enrollment_ledger)
) -> Dict[str, Any]:
    """
    Enroll the calling student in a course.
    """
    enrollment = ledger.enroll(identity, course_id)
    return {
        "message": "Successfully enrolled in course",
        "enrollment": EnrollmentOut.model_validate(enrollment),
    }


@router.delete("/unenroll/{course_id}", response_model=MessageResponse)
def unenroll_from_course(
    course_id: int,
    identity: Identity = Depends(get_current_identity),
    ledger: EnrollmentLedger = Depends(get_enrollment_ledger)
) -> Dict[str, str]:
    """
    Remove the calling student's enrollment in a course.
    """
    ledger.unenroll(identity, course_id)
    return {"message": "Successfully unenrolled from course"}
