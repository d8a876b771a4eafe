from typing import Optional

from pydantic import BaseModel, EmailStr, constr, field_validator


class LoginSchema(BaseModel):
    email: EmailStr
    password: constr(min_length=1)

    @field_validator("email")
    def normalize_email(cls, value):
        return value.strip().lower()


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    role: str
    user_id: str


class AdminProfileResponse(BaseModel):
    id: str
    role: str
    email: Optional[EmailStr] = None
