"""
Subject schemas.
"""
from pydantic import BaseModel, field_validator
from typing import List
from heptareview.schemas.utils import normalize_required_text


class SubjectResponse(BaseModel):
    """Subject response schema."""
    id: int
    name: str

    class Config:
        from_attributes = True


class CreateSubjectRequest(BaseModel):
    """Request schema for creating a subject."""
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return normalize_required_text(v, "name")


class SubjectsResponse(BaseModel):
    """Response schema for subjects list."""
    subjects: List[SubjectResponse]
