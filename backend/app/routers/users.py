"""
Users router for Clipper LMS.

Users read and update their own account; admins manage every account.
"""

from typing import Dict, Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.routers.auth import get_current_identity
from app.schemas.auth import Identity
from app.schemas.common import MessageResponse
from app.schemas.user import (
    UserPublic,
    UserListItem,
    UserDetail,
    UserUpdate,
    UserResponse,
    UserDetailResponse,
    UserListResponse,
    UserStatsResponse,
)
from app.services.users import UserDirectory


router = APIRouter()


def get_user_directory(db: Session = Depends(get_db)) -> UserDirectory:
    return UserDirectory(db)


@router.get("/me/stats", response_model=UserStatsResponse)
def get_my_stats(
    identity: Identity = Depends(get_current_identity),
    directory: UserDirectory = Depends(get_user_directory)
) -> Dict[str, Any]:
    """
    Count of courses created and enrollments held by the caller.
    """
    return {
        "message": "User statistics retrieved successfully",
        "stats": directory.stats(identity),
    }


@router.get("", response_model=UserListResponse)
def list_users(
    identity: Identity = Depends(get_current_identity),
    directory: UserDirectory = Depends(get_user_directory)
) -> Dict[str, Any]:
    """
    List all users (admin only).
    """
    users = directory.list_all(identity)
    return {
        "message": "Users retrieved successfully",
        "users": [UserListItem.model_validate(user) for user in users],
    }


@router.get("/{user_id}", response_model=UserDetailResponse)
def get_user(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    directory: UserDirectory = Depends(get_user_directory)
) -> Dict[str, Any]:
    """
    Get a user with created courses and enrollments (self or admin).
    """
    user = directory.get(identity, user_id)
    return {
        "message": "User retrieved successfully",
        "user": UserDetail.model_validate(user),
    }


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    identity: Identity = Depends(get_current_identity),
    directory: UserDirectory = Depends(get_user_directory)
) -> Dict[str, Any]:
    """
    Update name and/or email (self or admin).
    """
    user = directory.update(identity, user_id, name=user_update.name, email=user_update.email)
    return {
        "message": "User updated successfully",
        "user": UserPublic.model_validate(user),
    }


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    directory: UserDirectory = Depends(get_user_directory)
) -> Dict[str, str]:
    """
    Delete a user together with their courses and enrollments (admin only).
    """
    directory.delete(identity, user_id)
    return {"message": "User deleted successfully"}
