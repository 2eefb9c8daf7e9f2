"""
Calendar Service - academic calendar links per branch and semester
"""

from sqlalchemy.ext.asyncio import AsyncSession

from stride.core.exceptions import CalendarNotFoundError
from stride.core.logging_config import logger
from stride.models.academic import Semester
from stride.services.subject_service import subject_service


class CalendarService:

    async def get_calendar(self, db: AsyncSession, branch: str, semester: int) -> Semester:
        found = await subject_service.get_semester(db, branch, semester)
        if found is None or not found.academic_calendar_url:
            raise CalendarNotFoundError(branch, semester)
        return found

    async def set_calendar(self, db: AsyncSession, branch: str, semester: int, url: str) -> Semester:
        """Store the calendar link, creating the branch and semester when missing"""
        found = await subject_service.get_or_create_semester(db, branch, semester)
        found.academic_calendar_url = url
        await db.flush()
        logger.info(f"Academic calendar set for {branch} semester {semester}")
        return found


calendar_service = CalendarService()
