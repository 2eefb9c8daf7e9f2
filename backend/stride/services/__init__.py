from stride.services.cache_service import CacheService, cache_service
from stride.services.subject_service import SubjectService, subject_service
from stride.services.holiday_service import HolidayService, holiday_service
from stride.services.calendar_service import CalendarService, calendar_service

__all__ = [
    "CacheService",
    "cache_service",
    "SubjectService",
    "subject_service",
    "HolidayService",
    "holiday_service",
    "CalendarService",
    "calendar_service",
]
