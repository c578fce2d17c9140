"""
Authentication router for Clipper LMS.

Handles user registration and login, and provides the bearer-token
dependency every protected route depends on.
"""

import logging
from typing import Optional, Dict, Any
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.exceptions import Unauthorized
from app.core.security import InvalidToken, verify_token
from app.schemas.auth import (
    Identity,
    UserRegister,
    UserLogin,
    RegisterResponse,
    LoginResponse,
)
from app.schemas.user import UserPublic
from app.services.users import CredentialStore


logger = logging.getLogger(__name__)

router = APIRouter()

# Bearer scheme for token authentication; missing credentials are reported
# by get_current_identity so every rejection has the same shape
bearer_scheme = HTTPBearer(auto_error=False)


# Dependencies
def get_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    app_settings: Settings = Depends(get_settings)
) -> Identity:
    """
    Resolve the caller's identity from the ``Authorization: Bearer`` header.

    A missing header, a non-bearer scheme and any token the token service
    rejects all produce the same 401.
    """
    if credentials is None:
        raise Unauthorized()

    try:
        return verify_token(credentials.credentials, app_settings)
    except InvalidToken:
        logger.warning("Rejected request with invalid bearer token")
        raise Unauthorized() from None


def get_credential_store(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings)
) -> CredentialStore:
    return CredentialStore(db, app_settings)


# Endpoints
@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    store: CredentialStore = Depends(get_credential_store)
) -> Dict[str, Any]:
    """
    Register a new user. Role defaults to STUDENT.
    """
    user = store.register(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        role=user_data.role,
    )
    return {
        "message": "User registered successfully",
        "user": UserPublic.model_validate(user),
    }


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    store: CredentialStore = Depends(get_credential_store)
) -> Dict[str, Any]:
    """
    Authenticate with email and password and receive a bearer token.
    """
    user, token = store.login(credentials.email, credentials.password)
    return {
        "message": "Login successful",
        "token": token,
        "user": UserPublic.model_validate(user),
    }


@router.get("/me", response_model=Identity)
def get_current_identity_info(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """
    Return the identity carried by the caller's token.
    """
    return identity
