from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, conint, field_validator

from app.models.project_models import ProjectStatus
from app.schemas.backend_schemas.mentor_schemas import MentorBriefResponse
from app.schemas.backend_schemas.student_schemas import StudentBriefResponse


class ProjectCreateSchema(BaseModel):
    title: str
    description: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)

    @field_validator("title")
    def validate_title(cls, value):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Title is required")
        return cleaned

    @field_validator("description")
    def strip_description(cls, value):
        if value is None:
            return value
        return value.strip() or None

    @field_validator("tech_stack")
    def clean_tech_stack(cls, value):
        return [tag.strip() for tag in value if tag and tag.strip()]


class AssignMentorSchema(BaseModel):
    mentor_id: str


class ProgressUpdateIn(BaseModel):
    percentage_completion: Optional[conint(ge=0, le=100)] = None
    milestones: Optional[str] = None
    comments: Optional[str] = None


class ProgressRecordSchema(BaseModel):
    student_id: str
    files: List[str] = Field(default_factory=list)
    progress_update: ProgressUpdateIn


class ProgressUpdateResponse(BaseModel):
    date: datetime
    percentage_completion: Optional[int] = None
    milestones: Optional[str] = None
    comments: Optional[str] = None

    class Config:
        from_attributes = True


class SubmissionResponse(BaseModel):
    id: int
    student_id: str
    student: Optional[StudentBriefResponse] = None
    files: List[str] = Field(default_factory=list)
    progress_updates: List[ProgressUpdateResponse] = Field(default_factory=list)
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    status: ProjectStatus
    mentor_id: Optional[str] = None
    mentor: Optional[MentorBriefResponse] = None
    students_applied: List[StudentBriefResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentProjectResponse(BaseModel):
    """Project as shown to students; other applicants appear by id only."""

    id: str
    title: str
    description: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    status: ProjectStatus
    mentor: Optional[MentorBriefResponse] = None
    applicant_ids: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_project(cls, project) -> "StudentProjectResponse":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            tech_stack=project.tech_stack or [],
            status=project.status,
            mentor=MentorBriefResponse.model_validate(project.mentor) if project.mentor else None,
            applicant_ids=[s.id for s in project.students_applied],
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectDetailResponse(ProjectResponse):
    submissions: List[SubmissionResponse] = Field(default_factory=list)


class ProjectProgressResponse(BaseModel):
    title: str
    progress: List[SubmissionResponse] = Field(default_factory=list)


class ApplicationResponse(BaseModel):
    id: str
    title: str
    status: ProjectStatus

    class Config:
        from_attributes = True
