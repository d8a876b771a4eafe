# Auth service
import secrets

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import InvalidCredentialsError
from app.models.mentor_models import Mentor
from app.models.student_models import Student
from app.services.dependencies import ADMIN_SUBJECT_ID, Principal, Role
from app.utils.hashing import verify_password
from app.utils.logger import logger


def authenticate_admin(email: str, password: str) -> Principal:
    # the admin pair lives in settings, not in the database
    email_ok = secrets.compare_digest(
        email.lower().encode(), settings.ADMIN_EMAIL.lower().encode()
    )
    password_ok = secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    if not (email_ok and password_ok):
        logger.warning("Admin login failed for %s", email)
        raise InvalidCredentialsError()
    logger.info("Admin logged in")
    return Principal(subject_id=ADMIN_SUBJECT_ID, role=Role.admin)


def authenticate_student(db: Session, email: str, password: str) -> Student:
    student = db.query(Student).filter(Student.email == email).first()
    if not student or not verify_password(password, student.password):
        logger.warning("Student login failed for %s", email)
        raise InvalidCredentialsError()
    logger.info("Student %s logged in", student.id)
    return student


def authenticate_mentor(db: Session, email: str, password: str) -> Mentor:
    mentor = db.query(Mentor).filter(Mentor.email == email).first()
    if not mentor or not verify_password(password, mentor.password):
        logger.warning("Mentor login failed for %s", email)
        raise InvalidCredentialsError()
    logger.info("Mentor %s logged in", mentor.id)
    return mentor
