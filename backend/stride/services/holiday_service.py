"""
Holiday Service - holiday list storage and vacation planning inputs
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import date
from typing import List

from stride.core.exceptions import HolidayNotFoundError
from stride.core.logging_config import logger
from stride.models.holiday import Holiday
from stride.schemas.holiday import HolidayCreate
from stride.services.cache_service import cache_service
from stride.services import vacation_planner


def holiday_to_dict(holiday: Holiday) -> dict:
    return {
        "id": holiday.id,
        "name": holiday.name,
        "date": holiday.date.isoformat(),
        "is_floating": holiday.is_floating,
        "weekday": holiday.date.strftime("%A"),
    }


def to_planner_holiday(data: dict) -> vacation_planner.Holiday:
    return vacation_planner.Holiday(
        name=data["name"],
        date=date.fromisoformat(data["date"]),
        is_floating=data.get("is_floating", False),
        id=data.get("id"),
    )


class HolidayService:
    """Service for the institute holiday list"""

    async def list_holidays(self, db: AsyncSession) -> List[dict]:
        """All holidays, earliest first"""
        cached = await cache_service.get_holidays()
        if cached is not None:
            return cached

        result = await db.execute(select(Holiday).order_by(Holiday.date.asc()))
        holidays = [holiday_to_dict(h) for h in result.scalars().all()]

        await cache_service.set_holidays(holidays)
        return holidays

    async def planner_holidays(self, db: AsyncSession) -> List[vacation_planner.Holiday]:
        return [to_planner_holiday(h) for h in await self.list_holidays(db)]

    async def create_holiday(self, db: AsyncSession, data: HolidayCreate) -> Holiday:
        holiday = Holiday(name=data.name, date=data.date, is_floating=data.is_floating)
        db.add(holiday)
        await db.flush()

        await cache_service.invalidate_holidays()
        logger.info(f"Added holiday {holiday.name} on {holiday.date}")
        return holiday

    async def delete_holiday(self, db: AsyncSession, holiday_id: str) -> None:
        result = await db.execute(select(Holiday).where(Holiday.id == holiday_id))
        holiday = result.scalar_one_or_none()
        if holiday is None:
            raise HolidayNotFoundError(holiday_id)

        await db.delete(holiday)
        await db.flush()
        await cache_service.invalidate_holidays()
        logger.info(f"Deleted holiday {holiday.name}")


holiday_service = HolidayService()
