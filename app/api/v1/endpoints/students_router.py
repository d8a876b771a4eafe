from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.student_models import Student
from app.schemas.backend_schemas.project_schemas import (
    ApplicationResponse,
    StudentProjectResponse,
)
from app.services import project_service
from app.services.dependencies import get_current_student, require_student

router = APIRouter(prefix="/students", tags=["Students"])


@router.get(
    "/projects",
    response_model=List[StudentProjectResponse],
    dependencies=[Depends(require_student)],
)
def list_available_projects(db: Session = Depends(get_db)):
    return [
        StudentProjectResponse.from_project(project)
        for project in project_service.list_approved_projects(db)
    ]


@router.post("/projects/{project_id}/apply")
def apply_to_project(
    project_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    project = project_service.apply_to_project(db, project_id, student)
    return {
        "message": "Application submitted successfully.",
        "project": StudentProjectResponse.from_project(project),
    }


@router.get("/applications", response_model=List[ApplicationResponse])
def list_applications(student: Student = Depends(get_current_student)):
    return project_service.list_applications(student)
