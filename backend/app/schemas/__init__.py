"""
Pydantic schemas for Clipper LMS request bodies and responses.
"""
