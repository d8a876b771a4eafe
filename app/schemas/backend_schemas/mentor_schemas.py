from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class MentorBaseSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    expertise: Optional[str] = None

    @field_validator("name")
    def strip_name(cls, value):
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned

    @field_validator("email")
    def normalize_email(cls, value):
        if value is None:
            return value
        return value.strip().lower()


class MentorCreateSchema(MentorBaseSchema):
    name: str
    email: EmailStr


class MentorUpdateSchema(MentorBaseSchema):
    pass


class MentorBriefResponse(BaseModel):
    id: str
    name: str
    email: EmailStr

    class Config:
        from_attributes = True


class MentorResponse(BaseModel):
    id: str
    name: str
    email: EmailStr
    expertise: Optional[str] = None
    profile: Optional[Dict[str, Any]] = None
    assigned_project_ids: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_mentor(cls, mentor) -> "MentorResponse":
        return cls(
            id=mentor.id,
            name=mentor.name,
            email=mentor.email,
            expertise=mentor.expertise,
            profile=mentor.profile,
            assigned_project_ids=[p.id for p in mentor.assigned_projects],
            created_at=mentor.created_at,
            updated_at=mentor.updated_at,
        )
