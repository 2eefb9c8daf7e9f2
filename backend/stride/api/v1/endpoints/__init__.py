# API endpoints
from . import health, attendance, grades, students, holidays, calendar, subjects, resources, contributions

__all__ = [
    "health",
    "attendance",
    "grades",
    "students",
    "holidays",
    "calendar",
    "subjects",
    "resources",
    "contributions",
]
