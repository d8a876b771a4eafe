from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.rate_limiter import login_rate_limit
from app.db.database import get_db
from app.models.mentor_models import Mentor
from app.schemas.backend_schemas.auth_schemas import LoginSchema, TokenResponse
from app.schemas.backend_schemas.mentor_schemas import MentorResponse
from app.schemas.backend_schemas.student_schemas import ProfileUpdateSchema
from app.services.account_service import update_profile
from app.services.auth_service import authenticate_mentor
from app.services.dependencies import Role, create_access_token, get_current_mentor

router = APIRouter(prefix="/mentors", tags=["Mentors"])


@router.post("/login", response_model=TokenResponse)
@login_rate_limit()
def mentor_login(request: Request, payload: LoginSchema, db: Session = Depends(get_db)):
    mentor = authenticate_mentor(db, payload.email, payload.password)
    token = create_access_token(mentor.id, Role.mentor)
    return TokenResponse(token=token, role=Role.mentor.value, user_id=mentor.id)


@router.get("/profile", response_model=MentorResponse)
def mentor_profile(mentor: Mentor = Depends(get_current_mentor)):
    return MentorResponse.from_mentor(mentor)


@router.put("/profile")
def mentor_update_profile(
    payload: ProfileUpdateSchema,
    mentor: Mentor = Depends(get_current_mentor),
    db: Session = Depends(get_db),
):
    mentor = update_profile(db, mentor, payload)
    return {
        "message": "Profile updated successfully.",
        "mentor": MentorResponse.from_mentor(mentor),
    }
