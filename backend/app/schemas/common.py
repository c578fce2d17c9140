"""
Small nested shapes shared by several response schemas.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserSummary(ORMModel):
    id: int
    name: Optional[str] = None
    email: str


class InstructorBrief(ORMModel):
    id: int
    name: Optional[str] = None


class CourseBrief(ORMModel):
    id: int
    title: str
    price: float


class MessageResponse(BaseModel):
    message: str
