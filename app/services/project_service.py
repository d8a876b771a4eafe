"""
Project workflow.

Status moves Pending -> Approved | Rejected and Approved -> Completed; every
other move is refused with ``InvalidTransitionError``. Each operation below
commits once, so a two-sided relation change (application, mentor
assignment) is never left half written.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    AlreadyAppliedError,
    InvalidTransitionError,
    NotFoundError,
    NotProjectMentorError,
)
from app.models.mentor_models import Mentor
from app.models.project_models import (
    ProgressUpdate,
    Project,
    ProjectStatus,
    Submission,
    project_applications,
)
from app.models.student_models import Student
from app.schemas.backend_schemas.project_schemas import (
    ProgressRecordSchema,
    ProjectCreateSchema,
)
from app.services import notification_service
from app.services.notification_service import EmailNotification

logger = logging.getLogger(__name__)

APPLIED = "Applied"
IN_PROGRESS = "In Progress"

# target status -> statuses it may be entered from
ALLOWED_TRANSITIONS = {
    ProjectStatus.approved: frozenset({ProjectStatus.pending}),
    ProjectStatus.rejected: frozenset({ProjectStatus.pending}),
    ProjectStatus.completed: frozenset({ProjectStatus.approved}),
}


@dataclass
class WorkflowResult:
    project: Project
    notifications: list[EmailNotification] = field(default_factory=list)


# -------------------------
# READ
# -------------------------
def get_project_or_404(db: Session, project_id: str) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise NotFoundError("Project not found.")
    return project


def list_projects(db: Session, status: ProjectStatus | None = None) -> list[Project]:
    query = db.query(Project)
    if status is not None:
        query = query.filter(Project.status == status)
    return query.order_by(desc(Project.created_at)).all()


def list_pending_projects(db: Session) -> list[Project]:
    return list_projects(db, ProjectStatus.pending)


def list_approved_projects(db: Session) -> list[Project]:
    return list_projects(db, ProjectStatus.approved)


def _ensure_project_mentor(project: Project, mentor: Mentor) -> None:
    if project.mentor_id != mentor.id:
        raise NotProjectMentorError()


def list_applicants(db: Session, project_id: str, mentor: Mentor) -> list[Student]:
    project = get_project_or_404(db, project_id)
    _ensure_project_mentor(project, mentor)
    return list(project.students_applied)


# -------------------------
# CREATE
# -------------------------
def create_project(db: Session, payload: ProjectCreateSchema) -> Project:
    project = Project(
        title=payload.title,
        description=payload.description,
        tech_stack=list(payload.tech_stack),
        status=ProjectStatus.pending,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("Project %s created (title=%r)", project.id, project.title)
    return project


# -------------------------
# STATUS TRANSITIONS
# -------------------------
def _transition(db: Session, project_id: str, target: ProjectStatus, error_message: str) -> Project:
    project = get_project_or_404(db, project_id)
    sources = ALLOWED_TRANSITIONS[target]

    # conditional update: a concurrent transition that already moved the
    # row out of its source state makes this one match nothing
    updated = (
        db.query(Project)
        .filter(Project.id == project.id, Project.status.in_(list(sources)))
        .update(
            {Project.status: target, Project.updated_at: datetime.utcnow()},
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        raise InvalidTransitionError(error_message)

    db.commit()
    db.refresh(project)
    logger.info("Project %s moved to %s", project.id, target.value)
    return project


def approve_project(db: Session, project_id: str) -> WorkflowResult:
    project = _transition(
        db, project_id, ProjectStatus.approved, "Project is not pending for approval."
    )
    notifications = [
        notification_service.project_approved(student, project)
        for student in project.students_applied
    ]
    return WorkflowResult(project=project, notifications=notifications)


def reject_project(db: Session, project_id: str) -> WorkflowResult:
    project = _transition(
        db, project_id, ProjectStatus.rejected, "Project is not pending for rejection."
    )
    notifications = [
        notification_service.project_rejected(student, project)
        for student in project.students_applied
    ]
    return WorkflowResult(project=project, notifications=notifications)


def complete_project(db: Session, project_id: str) -> WorkflowResult:
    project = _transition(
        db, project_id, ProjectStatus.completed, "Only approved projects can be completed."
    )
    return WorkflowResult(project=project)


# -------------------------
# MENTOR ASSIGNMENT
# -------------------------
def assign_mentor(db: Session, project_id: str, mentor_id: str) -> WorkflowResult:
    project = get_project_or_404(db, project_id)

    mentor = db.query(Mentor).filter(Mentor.id == mentor_id).first()
    if not mentor:
        raise NotFoundError("Mentor not found.")

    previous = project.mentor

    # projects.mentor_id is the only stored side; both mentors'
    # assigned_projects follow from it
    project.mentor = mentor
    db.commit()
    db.refresh(project)

    notifications = [notification_service.mentor_assigned(mentor, project)]
    if previous is not None and previous.id != mentor.id:
        notifications.append(notification_service.mentor_unassigned(previous, project))
        logger.info(
            "Project %s mentor changed %s -> %s", project.id, previous.id, mentor.id
        )
    else:
        logger.info("Project %s assigned to mentor %s", project.id, mentor.id)

    return WorkflowResult(project=project, notifications=notifications)


# -------------------------
# APPLICATIONS
# -------------------------
def _has_applied(db: Session, project_id: str, student_id: str) -> bool:
    row = (
        db.query(project_applications.c.project_id)
        .filter(
            project_applications.c.project_id == project_id,
            project_applications.c.student_id == student_id,
        )
        .first()
    )
    return row is not None


def apply_to_project(db: Session, project_id: str, student: Student) -> Project:
    project = get_project_or_404(db, project_id)

    if project.status != ProjectStatus.approved:
        raise InvalidTransitionError("Project is not open for applications.")

    if _has_applied(db, project.id, student.id):
        raise AlreadyAppliedError()

    project.students_applied.append(student)
    student.project_status = {**(student.project_status or {}), project.id: APPLIED}

    try:
        db.commit()
    except IntegrityError:
        # lost a race against an identical application
        db.rollback()
        raise AlreadyAppliedError()

    db.refresh(project)
    logger.info("Student %s applied to project %s", student.id, project.id)
    return project


def list_applications(student: Student) -> list[Project]:
    return list(student.applied_projects)


# -------------------------
# PROGRESS
# -------------------------
def record_progress(
    db: Session, project_id: str, mentor: Mentor, payload: ProgressRecordSchema
) -> Project:
    project = get_project_or_404(db, project_id)
    _ensure_project_mentor(project, mentor)

    student = db.query(Student).filter(Student.id == payload.student_id).first()
    if not student or not _has_applied(db, project.id, student.id):
        raise NotFoundError("Student not found or not applied to this project.")

    submission = Submission(project=project, student=student, files=list(payload.files))
    submission.progress_updates.append(
        ProgressUpdate(date=datetime.utcnow(), **payload.progress_update.model_dump())
    )
    db.add(submission)
    student.project_status = {**(student.project_status or {}), project.id: IN_PROGRESS}

    db.commit()
    db.refresh(project)
    logger.info(
        "Progress recorded for student %s on project %s by mentor %s",
        student.id,
        project.id,
        mentor.id,
    )
    return project
