from fastapi import APIRouter, Depends, Request

from app.core.config import settings
from app.core.rate_limiter import login_rate_limit
from app.schemas.backend_schemas.auth_schemas import (
    AdminProfileResponse,
    LoginSchema,
    TokenResponse,
)
from app.services.auth_service import authenticate_admin
from app.services.dependencies import Principal, create_access_token, require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=TokenResponse)
@login_rate_limit()
def admin_login(request: Request, payload: LoginSchema):
    principal = authenticate_admin(payload.email, payload.password)
    token = create_access_token(principal.subject_id, principal.role)
    return TokenResponse(token=token, role=principal.role.value, user_id=principal.subject_id)


@router.get("/profile", response_model=AdminProfileResponse)
def admin_profile(principal: Principal = Depends(require_admin)):
    return AdminProfileResponse(
        id=principal.subject_id,
        role=principal.role.value,
        email=settings.ADMIN_EMAIL,
    )
