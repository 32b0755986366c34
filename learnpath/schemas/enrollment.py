"""Enrollment record schema for LearnPath."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import DocumentModel


class Role(str, Enum):
    DEVELOPER = "Developer"
    PRODUCT_ANALYST = "Product Definition Analyst (PDA)"


class EnrollmentData(DocumentModel):
    name: str
    age: int = Field(..., ge=0)
    email: str
    role: Role
    years_of_experience: int = Field(..., ge=0)
    enrolled_courses: list[str] = []
    enrollment_date: datetime
