from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, constr, field_validator


def _normalize_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip().lower()


class StudentBaseSchema(BaseModel):
    name: Optional[str] = None
    course: Optional[str] = None
    section: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("name", "course", "section")
    def strip_text(cls, value):
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Field cannot be empty")
        return cleaned

    @field_validator("email")
    def normalize_email(cls, value):
        return _normalize_email(value)


class StudentCreateSchema(StudentBaseSchema):
    name: str
    roll_no: str
    course: str
    section: str
    email: EmailStr

    @field_validator("roll_no")
    def validate_roll_no(cls, value):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Roll number is required")
        if not cleaned.isdigit():
            raise ValueError("Roll number must be numeric")
        return cleaned


class StudentUpdateSchema(StudentBaseSchema):
    assigned_mentor_id: Optional[str] = None


class ProfileUpdateSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[constr(min_length=6)] = None
    profile: Optional[Dict[str, Any]] = None

    @field_validator("name")
    def strip_name(cls, value):
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name cannot be empty")
        return cleaned

    @field_validator("email")
    def normalize_email(cls, value):
        return _normalize_email(value)


class StudentBriefResponse(BaseModel):
    id: str
    name: str
    roll_no: str
    email: EmailStr

    class Config:
        from_attributes = True


class StudentResponse(BaseModel):
    id: str
    name: str
    roll_no: str
    course: str
    section: str
    email: EmailStr
    assigned_mentor_id: Optional[str] = None
    applied_project_ids: list[str] = Field(default_factory=list)
    project_status: Dict[str, str] = Field(default_factory=dict)
    profile: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_student(cls, student) -> "StudentResponse":
        return cls(
            id=student.id,
            name=student.name,
            roll_no=student.roll_no,
            course=student.course,
            section=student.section,
            email=student.email,
            assigned_mentor_id=student.assigned_mentor_id,
            applied_project_ids=[p.id for p in student.applied_projects],
            project_status=student.project_status or {},
            profile=student.profile,
            created_at=student.created_at,
            updated_at=student.updated_at,
        )
