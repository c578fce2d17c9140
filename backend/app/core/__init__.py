"""
Core module for Clipper LMS backend.

This module contains core functionality including:
- Configuration management
- Database engine and session management
- Security utilities (JWT, password hashing, authorization predicates)
- Domain errors and their HTTP mapping
"""

from .config import settings

__all__ = [
    "settings",
]
