# Router aggregator
from fastapi import APIRouter
from app.api.v1.endpoints.auth import admin_auth_router
from app.api.v1.endpoints.auth import student_auth_router
from app.api.v1.endpoints.auth import mentor_auth_router
from app.api.v1.endpoints import admin_router
from app.api.v1.endpoints import students_router
from app.api.v1.endpoints import mentors_router


api_router = APIRouter()

api_router.include_router(admin_auth_router.router)
api_router.include_router(student_auth_router.router)
api_router.include_router(mentor_auth_router.router)
api_router.include_router(admin_router.router)
api_router.include_router(students_router.router)
api_router.include_router(mentors_router.router)
