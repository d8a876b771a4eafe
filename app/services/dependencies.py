import enum
import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from jwt.exceptions import InvalidTokenError

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    ForbiddenError,
    InvalidAccessTokenError,
    NotFoundError,
    UnauthenticatedError,
)
from app.db.database import get_db
from app.models.student_models import Student
from app.models.mentor_models import Mentor


# HTTPBearer for extracting Bearer token from Authorization header
http_bearer = HTTPBearer(auto_error=False)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

ADMIN_SUBJECT_ID = "admin"


class Role(str, enum.Enum):
    admin = "admin"
    mentor = "mentor"
    student = "student"


@dataclass(frozen=True)
class Principal:
    subject_id: str
    role: Role


def create_access_token(
    subject_id: str, role: Role | str, expires_delta: timedelta | None = None
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta if expires_delta is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    to_encode = {
        "sub": str(subject_id),
        "role": Role(role).value,
        "type": "access",
        "exp": expire,
        "iat": now,
    }

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> Principal | None:
    """Return the principal a token was issued for, or None when it is
    malformed, expired, wrongly signed or carries an unknown role."""
    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except InvalidTokenError:
        return None

    if payload.get("type") != "access":
        return None

    subject_id = payload.get("sub")
    if not subject_id:
        return None

    try:
        role = Role(payload.get("role"))
    except ValueError:
        return None

    return Principal(subject_id=subject_id, role=role)


def _get_bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if not credentials or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    token = credentials.credentials
    if not token:
        raise UnauthenticatedError()
    return token


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> Principal:
    token = _get_bearer_token(credentials)
    principal = verify_access_token(token)
    if principal is None:
        raise InvalidAccessTokenError()
    return principal


def require_roles(*roles: Role | str):
    allowed = frozenset(Role(r) for r in roles)

    def _check_role(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise ForbiddenError()
        return principal

    return _check_role


require_admin = require_roles(Role.admin)
require_mentor = require_roles(Role.mentor)
require_student = require_roles(Role.student)


def get_current_student(
    principal: Principal = Depends(require_student),
    db: Session = Depends(get_db),
) -> Student:
    student = db.query(Student).filter(Student.id == principal.subject_id).first()
    if not student:
        raise NotFoundError("Student not found.")
    return student


def get_current_mentor(
    principal: Principal = Depends(require_mentor),
    db: Session = Depends(get_db),
) -> Mentor:
    mentor = db.query(Mentor).filter(Mentor.id == principal.subject_id).first()
    if not mentor:
        raise NotFoundError("Mentor not found.")
    return mentor
