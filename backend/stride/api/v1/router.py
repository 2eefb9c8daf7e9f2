from fastapi import APIRouter
from stride.api.v1.endpoints import (
    health,
    attendance,
    grades,
    students,
    holidays,
    calendar,
    subjects,
    resources,
    contributions,
)

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(attendance.router)
api_router.include_router(grades.router)
api_router.include_router(students.router)
api_router.include_router(holidays.router)
api_router.include_router(calendar.router)
api_router.include_router(subjects.router)
api_router.include_router(resources.router)
api_router.include_router(contributions.router)
