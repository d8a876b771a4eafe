from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.models.project_models import ProjectStatus
from app.schemas.backend_schemas.mentor_schemas import (
    MentorCreateSchema,
    MentorResponse,
    MentorUpdateSchema,
)
from app.schemas.backend_schemas.project_schemas import (
    AssignMentorSchema,
    ProjectCreateSchema,
    ProjectProgressResponse,
    ProjectResponse,
    SubmissionResponse,
)
from app.schemas.backend_schemas.student_schemas import (
    StudentCreateSchema,
    StudentResponse,
    StudentUpdateSchema,
)
from app.schemas.backend_schemas.utils_schema import CreatedResponse, MessageResponse
from app.services import account_service, notification_service, project_service
from app.services.dependencies import require_admin

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


def _workflow_response(result, message: str, background_tasks: BackgroundTasks) -> dict:
    if result.notifications:
        background_tasks.add_task(notification_service.dispatch, result.notifications)
    return {
        "message": message,
        "project": ProjectResponse.model_validate(result.project),
    }


# -------------------------
# PROJECTS
# -------------------------
@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreateSchema, db: Session = Depends(get_db)):
    return project_service.create_project(db, payload)


@router.get("/projects", response_model=List[ProjectResponse])
def list_projects(
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return project_service.list_projects(db, status_filter)


@router.get("/projects/pending", response_model=List[ProjectResponse])
def list_pending_projects(db: Session = Depends(get_db)):
    return project_service.list_pending_projects(db)


@router.put("/projects/{project_id}/assign-mentor")
def assign_mentor(
    project_id: str,
    payload: AssignMentorSchema,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    result = project_service.assign_mentor(db, project_id, payload.mentor_id)
    return _workflow_response(result, "Mentor assigned to project successfully.", background_tasks)


@router.put("/projects/{project_id}/approve")
def approve_project(
    project_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    result = project_service.approve_project(db, project_id)
    return _workflow_response(result, "Project approved successfully.", background_tasks)


@router.put("/projects/{project_id}/reject")
def reject_project(
    project_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    result = project_service.reject_project(db, project_id)
    return _workflow_response(result, "Project rejected successfully.", background_tasks)


@router.put("/projects/{project_id}/complete")
def complete_project(
    project_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)
):
    result = project_service.complete_project(db, project_id)
    return _workflow_response(result, "Project marked as completed.", background_tasks)


@router.get("/projects/{project_id}/progress", response_model=ProjectProgressResponse)
def project_progress(project_id: str, db: Session = Depends(get_db)):
    project = project_service.get_project_or_404(db, project_id)
    return ProjectProgressResponse(
        title=project.title,
        progress=[SubmissionResponse.model_validate(s) for s in project.submissions],
    )


# -------------------------
# STUDENTS
# -------------------------
@router.get("/students", response_model=List[StudentResponse])
def list_students(db: Session = Depends(get_db)):
    return [StudentResponse.from_student(s) for s in account_service.list_students(db)]


@router.post(
    "/add-student", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
def add_student(
    payload: StudentCreateSchema,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    student, welcome = account_service.create_student(db, payload)
    background_tasks.add_task(notification_service.dispatch, [welcome])
    return CreatedResponse(message="Student added successfully.", id=student.id)


@router.put("/update-student/{student_id}")
def update_student(
    student_id: str, payload: StudentUpdateSchema, db: Session = Depends(get_db)
):
    student = account_service.update_student(db, student_id, payload)
    return {
        "message": "Student updated successfully.",
        "student": StudentResponse.from_student(student),
    }


@router.delete("/delete-student/{student_id}", response_model=MessageResponse)
def delete_student(student_id: str, db: Session = Depends(get_db)):
    account_service.delete_student(db, student_id)
    return MessageResponse(message="Student deleted successfully.")


# -------------------------
# MENTORS
# -------------------------
@router.get("/mentors", response_model=List[MentorResponse])
def list_mentors(db: Session = Depends(get_db)):
    return [MentorResponse.from_mentor(m) for m in account_service.list_mentors(db)]


@router.post(
    "/add-mentor", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
def add_mentor(
    payload: MentorCreateSchema,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    mentor, welcome = account_service.create_mentor(db, payload)
    background_tasks.add_task(notification_service.dispatch, [welcome])
    return CreatedResponse(message="Mentor added successfully.", id=mentor.id)


@router.put("/update-mentor/{mentor_id}")
def update_mentor(mentor_id: str, payload: MentorUpdateSchema, db: Session = Depends(get_db)):
    mentor = account_service.update_mentor(db, mentor_id, payload)
    return {
        "message": "Mentor updated successfully.",
        "mentor": MentorResponse.from_mentor(mentor),
    }


@router.delete("/delete-mentor/{mentor_id}", response_model=MessageResponse)
def delete_mentor(mentor_id: str, db: Session = Depends(get_db)):
    account_service.delete_mentor(db, mentor_id)
    return MessageResponse(message="Mentor deleted successfully.")
