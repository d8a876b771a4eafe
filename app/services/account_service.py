from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models.mentor_models import Mentor
from app.models.student_models import Student
from app.schemas.backend_schemas.mentor_schemas import MentorCreateSchema, MentorUpdateSchema
from app.schemas.backend_schemas.student_schemas import (
    ProfileUpdateSchema,
    StudentCreateSchema,
    StudentUpdateSchema,
)
from app.services import notification_service
from app.services.notification_service import EmailNotification
from app.utils.hashing import generate_password, get_password_hash

logger = logging.getLogger(__name__)


def _commit_unique(db: Session, conflict_message: str) -> None:
    # unique columns are re-checked by the database on commit
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)


def _ensure_email_free(db: Session, model, email: str, exclude_id: str | None = None) -> None:
    query = db.query(model).filter(model.email == email)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if query.first():
        raise ConflictError(f"Email already used by another {model.__tablename__[:-1]}.")


# -------------------------
# STUDENTS
# -------------------------
def list_students(db: Session) -> list[Student]:
    return db.query(Student).order_by(Student.roll_no).all()


def get_student_or_404(db: Session, student_id: str) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found.")
    return student


def create_student(
    db: Session, payload: StudentCreateSchema
) -> tuple[Student, EmailNotification]:
    existing = (
        db.query(Student)
        .filter(or_(Student.roll_no == payload.roll_no, Student.email == payload.email))
        .first()
    )
    if existing:
        raise ConflictError("Student with this roll number or email already exists.")

    # one-time password; only the hash is stored
    generated_password = generate_password()
    student = Student(
        name=payload.name,
        roll_no=payload.roll_no,
        course=payload.course,
        section=payload.section,
        email=payload.email,
        password=get_password_hash(generated_password),
        project_status={},
    )
    db.add(student)
    _commit_unique(db, "Student with this roll number or email already exists.")
    db.refresh(student)

    logger.info("Student %s added (roll_no=%s)", student.id, student.roll_no)
    return student, notification_service.student_welcome(student.email, generated_password)


def update_student(db: Session, student_id: str, payload: StudentUpdateSchema) -> Student:
    student = get_student_or_404(db, student_id)

    if payload.email and payload.email != student.email:
        _ensure_email_free(db, Student, payload.email, exclude_id=student.id)

    if payload.assigned_mentor_id is not None:
        mentor = db.query(Mentor).filter(Mentor.id == payload.assigned_mentor_id).first()
        if not mentor:
            raise NotFoundError("Mentor not found.")

    updatable = ("name", "course", "section", "email", "assigned_mentor_id")
    for field in updatable:
        val = getattr(payload, field, None)
        if val is not None:
            setattr(student, field, val)

    _commit_unique(db, "Email already used by another student.")
    db.refresh(student)
    logger.info("Student %s updated", student.id)
    return student


def delete_student(db: Session, student_id: str) -> None:
    student = get_student_or_404(db, student_id)
    # applications and submissions of the student go with it
    db.delete(student)
    db.commit()
    logger.info("Student %s deleted", student_id)


# -------------------------
# MENTORS
# -------------------------
def list_mentors(db: Session) -> list[Mentor]:
    return db.query(Mentor).order_by(Mentor.name).all()


def get_mentor_or_404(db: Session, mentor_id: str) -> Mentor:
    mentor = db.query(Mentor).filter(Mentor.id == mentor_id).first()
    if not mentor:
        raise NotFoundError("Mentor not found.")
    return mentor


def create_mentor(
    db: Session, payload: MentorCreateSchema
) -> tuple[Mentor, EmailNotification]:
    if db.query(Mentor).filter(Mentor.email == payload.email).first():
        raise ConflictError("Mentor with this email already exists.")

    generated_password = generate_password()
    mentor = Mentor(
        name=payload.name,
        email=payload.email,
        expertise=payload.expertise,
        password=get_password_hash(generated_password),
    )
    db.add(mentor)
    _commit_unique(db, "Mentor with this email already exists.")
    db.refresh(mentor)

    logger.info("Mentor %s added", mentor.id)
    return mentor, notification_service.mentor_welcome(mentor.email, generated_password)


def update_mentor(db: Session, mentor_id: str, payload: MentorUpdateSchema) -> Mentor:
    mentor = get_mentor_or_404(db, mentor_id)

    if payload.email and payload.email != mentor.email:
        _ensure_email_free(db, Mentor, payload.email, exclude_id=mentor.id)

    for field in ("name", "email", "expertise"):
        val = getattr(payload, field, None)
        if val is not None:
            setattr(mentor, field, val)

    _commit_unique(db, "Email already used by another mentor.")
    db.refresh(mentor)
    logger.info("Mentor %s updated", mentor.id)
    return mentor


def delete_mentor(db: Session, mentor_id: str) -> None:
    mentor = get_mentor_or_404(db, mentor_id)
    # projects and students pointing at the mentor are set back to NULL
    db.delete(mentor)
    db.commit()
    logger.info("Mentor %s deleted", mentor_id)


# -------------------------
# SELF-SERVICE PROFILE
# -------------------------
def update_profile(db: Session, account: Student | Mentor, payload: ProfileUpdateSchema):
    model = type(account)

    if payload.email and payload.email != account.email:
        _ensure_email_free(db, model, payload.email, exclude_id=account.id)

    if payload.name is not None:
        account.name = payload.name
    if payload.email is not None:
        account.email = payload.email
    if payload.password is not None:
        account.password = get_password_hash(payload.password)
    if payload.profile is not None:
        account.profile = {**(account.profile or {}), **payload.profile}

    _commit_unique(db, f"Email already used by another {model.__tablename__[:-1]}.")
    db.refresh(account)
    logger.info("%s %s updated own profile", model.__name__, account.id)
    return account
