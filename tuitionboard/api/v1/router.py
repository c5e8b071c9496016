"""Main API router aggregating all module routers."""

from fastapi import APIRouter

from tuitionboard.api.v1.endpoints import (
    attendance,
    auth,
    calendar,
    class_logs,
    dashboard,
    reports,
    students,
    tuitions,
)
from tuitionboard.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid session token"},
        404: {"model": ErrorResponse, "description": "Resource not found"},
        503: {"model": ErrorResponse, "description": "Data store unavailable"},
    },
)

# Current tutor (profile is created on first sign-in)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

# Dashboard
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)

# Tuitions
api_router.include_router(
    tuitions.router,
    prefix="/tuitions",
    tags=["Tuitions"],
)

# Students
api_router.include_router(
    students.router,
    prefix="/students",
    tags=["Students"],
)

# Attendance (tuition-scoped)
api_router.include_router(
    attendance.router,
    prefix="/tuitions/{tuition_id}/attendance",
    tags=["Attendance"],
)

# Class logs (tuition-scoped)
api_router.include_router(
    class_logs.router,
    prefix="/tuitions/{tuition_id}/class-logs",
    tags=["Class Logs"],
)

# Calendar (tuition-scoped)
api_router.include_router(
    calendar.router,
    prefix="/tuitions/{tuition_id}/calendar",
    tags=["Calendar"],
)

# Reports (tuition-scoped)
api_router.include_router(
    reports.router,
    prefix="/tuitions/{tuition_id}/reports",
    tags=["Reports"],
)
