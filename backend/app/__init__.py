"""
Clipper LMS backend: users, courses and enrollments behind a JWT-protected
REST API.
"""

__version__ = "1.0.0"
