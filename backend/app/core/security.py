"""
Security utilities for Clipper LMS.

Handles password hashing, JWT token creation/verification, and the
role/ownership predicates evaluated by route handlers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from .config import Settings, settings
from .exceptions import Forbidden
from app.models.user import User, UserRole
from app.schemas.auth import Identity


# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)


class InvalidToken(Exception):
    """Raised for any token that cannot be turned into an identity."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or empty stored hash
        return False


def get_password_hash(password: str, app_settings: Optional[Settings] = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash
        app_settings: Settings whose ``BCRYPT_ROUNDS`` apply; defaults to the
            environment settings

    Returns:
        str: The hashed password
    """
    context = pwd_context
    if app_settings is not None and app_settings.BCRYPT_ROUNDS != settings.BCRYPT_ROUNDS:
        context = pwd_context.copy(bcrypt__rounds=app_settings.BCRYPT_ROUNDS)
    return context.hash(password)


def create_access_token(
    identity: Identity,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None,
    app_settings: Optional[Settings] = None
) -> str:
    """
    Create a JWT access token for an identity.

    The token embeds ``id``, ``role`` and ``name``. It carries an ``exp``
    claim unless expiry is disabled (``ACCESS_TOKEN_EXPIRE_MINUTES=0``) and
    no explicit ``expires_delta`` is given.

    Args:
        identity: The identity to encode
        expires_delta: Optional custom expiration time
        additional_claims: Optional additional claims to include in the token
        app_settings: Settings holding the key, algorithm and expiry; defaults
            to the environment settings

    Returns:
        str: The encoded JWT token
    """
    app_settings = app_settings or settings
    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {
        "id": identity.id,
        "role": identity.role.value,
        "name": identity.name,
        "iat": now,
    }

    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta
    elif app_settings.token_expiry_enabled:
        to_encode["exp"] = now + timedelta(minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    # Add additional claims if provided
    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        app_settings.SECRET_KEY,
        algorithm=app_settings.ALGORITHM
    )


def verify_token(token: Optional[str], app_settings: Optional[Settings] = None) -> Identity:
    """
    Verify a JWT token and decode the identity it carries.

    Malformed tokens, bad signatures, expired tokens and payloads without a
    usable identity all raise the same ``InvalidToken``.

    Args:
        token: The JWT token to verify
        app_settings: Settings holding the key and algorithm; defaults to the
            environment settings

    Returns:
        Identity: The decoded identity
    """
    if not token:
        raise InvalidToken()

    app_settings = app_settings or settings

    try:
        payload = jwt.decode(
            token,
            app_settings.SECRET_KEY,
            algorithms=[app_settings.ALGORITHM]
        )
    except JWTError as exc:
        raise InvalidToken() from exc

    try:
        return Identity(
            id=payload["id"],
            role=payload["role"],
            name=payload.get("name"),
        )
    except (KeyError, TypeError, ValidationError) as exc:
        raise InvalidToken() from exc


def require_role(identity: Identity, *roles: UserRole, message: Optional[str] = None) -> None:
    """
    Reject the identity unless it holds one of ``roles``.
    """
    if identity.role not in roles:
        raise Forbidden(message)


def require_owner_or_admin(identity: Identity, owner_id: int, message: Optional[str] = None) -> None:
    """
    Reject the identity unless it is an admin or owns the resource.
    """
    if identity.role == UserRole.ADMIN:
        return
    if identity.id != owner_id:
        raise Forbidden(message)


def identity_from_user(user: User) -> Identity:
    """Build the token identity for a persisted user."""
    return Identity(id=user.id, role=user.role, name=user.name)
