from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.rate_limiter import login_rate_limit
from app.db.database import get_db
from app.models.student_models import Student
from app.schemas.backend_schemas.auth_schemas import LoginSchema, TokenResponse
from app.schemas.backend_schemas.student_schemas import (
    ProfileUpdateSchema,
    StudentResponse,
)
from app.services.account_service import update_profile
from app.services.auth_service import authenticate_student
from app.services.dependencies import Role, create_access_token, get_current_student

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("/login", response_model=TokenResponse)
@login_rate_limit()
def student_login(request: Request, payload: LoginSchema, db: Session = Depends(get_db)):
    student = authenticate_student(db, payload.email, payload.password)
    token = create_access_token(student.id, Role.student)
    return TokenResponse(token=token, role=Role.student.value, user_id=student.id)


@router.get("/profile", response_model=StudentResponse)
def student_profile(student: Student = Depends(get_current_student)):
    return StudentResponse.from_student(student)


@router.put("/profile")
def student_update_profile(
    payload: ProfileUpdateSchema,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    student = update_profile(db, student, payload)
    return {
        "message": "Profile updated successfully.",
        "student": StudentResponse.from_student(student),
    }
