from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.mentor_models import Mentor
from app.schemas.backend_schemas.project_schemas import (
    ProgressRecordSchema,
    ProjectDetailResponse,
    ProjectResponse,
)
from app.schemas.backend_schemas.student_schemas import StudentResponse
from app.services import project_service
from app.services.dependencies import get_current_mentor

router = APIRouter(prefix="/mentors", tags=["Mentors"])


@router.get("/projects", response_model=List[ProjectResponse])
def list_assigned_projects(mentor: Mentor = Depends(get_current_mentor)):
    return list(mentor.assigned_projects)


@router.get("/projects/{project_id}/applications", response_model=List[StudentResponse])
def list_project_applications(
    project_id: str,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    students = project_service.list_applicants(db, project_id, mentor)
    return [StudentResponse.from_student(s) for s in students]


@router.put("/projects/{project_id}/progress")
def record_progress(
    project_id: str,
    payload: ProgressRecordSchema,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    project = project_service.record_progress(db, project_id, mentor, payload)
    return {
        "message": "Progress updated successfully.",
        "project": ProjectDetailResponse.model_validate(project),
    }
