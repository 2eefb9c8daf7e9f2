"""
Holiday API endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List, Optional

from stride.core.database import get_db
from stride.modules.auth import require_admin
from stride.schemas.holiday import HolidayCreate, HolidayResponse
from stride.services import vacation_planner
from stride.services.holiday_service import holiday_service, holiday_to_dict

router = APIRouter(prefix="/holidays", tags=["holidays"])


def planner_holiday_response(holiday: vacation_planner.Holiday) -> HolidayResponse:
    return HolidayResponse(
        id=holiday.id or "",
        name=holiday.name,
        date=holiday.date,
        is_floating=holiday.is_floating,
        weekday=holiday.date.strftime("%A"),
    )


@router.get("", response_model=List[HolidayResponse])
async def list_holidays(db: AsyncSession = Depends(get_db)):
    """All holidays in ascending date order"""
    return await holiday_service.list_holidays(db)


@router.get("/upcoming", response_model=List[HolidayResponse])
async def upcoming_holidays(
    limit: int = Query(5, ge=1, le=50),
    today: Optional[date] = Query(None, description="Reference day, defaults to today"),
    db: AsyncSession = Depends(get_db),
):
    holidays = await holiday_service.planner_holidays(db)
    upcoming = vacation_planner.upcoming_holidays(holidays, today=today, limit=limit)
    return [planner_holiday_response(h) for h in upcoming]


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
async def create_holiday(
    payload: HolidayCreate,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    holiday = await holiday_service.create_holiday(db, payload)
    return holiday_to_dict(holiday)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holiday(
    holiday_id: str,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    await holiday_service.delete_holiday(db, holiday_id)
