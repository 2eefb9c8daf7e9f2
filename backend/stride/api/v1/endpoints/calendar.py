"""
Calendar API endpoints

- GET  /calendar/suggestions  - month view with holidays and leave suggestions
- GET  /calendar              - academic calendar link for a branch and semester
- POST /calendar              - set the link (Admin only)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional

from stride.core.database import get_db
from stride.modules.auth import require_admin
from stride.schemas.calendar import (
    CalendarUpsert,
    CalendarResponse,
    SuggestionResponse,
    DayPlanResponse,
    MonthPlanResponse,
)
from stride.services import vacation_planner
from stride.services.calendar_service import calendar_service
from stride.services.holiday_service import holiday_service
from stride.api.v1.endpoints.holidays import planner_holiday_response

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _suggestion_response(suggestion: Optional[vacation_planner.Suggestion]) -> Optional[SuggestionResponse]:
    if suggestion is None:
        return None
    return SuggestionResponse(date=suggestion.date, type=suggestion.type.value, reason=suggestion.reason)


@router.get("/suggestions", response_model=MonthPlanResponse)
async def month_suggestions(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    """Every day of the month with its holiday, leave suggestion and weekend flags"""
    today = date.today()
    year = year or today.year
    month = month or today.month

    holidays = await holiday_service.planner_holidays(db)
    plan = vacation_planner.plan_month(year, month, holidays)

    days = [
        DayPlanResponse(
            date=day.date,
            holiday=planner_holiday_response(day.holiday) if day.holiday else None,
            suggestion=_suggestion_response(day.suggestion),
            is_weekend=day.is_weekend,
            is_vacation_weekend=day.is_vacation_weekend,
        )
        for day in plan
    ]
    return MonthPlanResponse(
        year=year,
        month=month,
        days=days,
        suggestions=[d.suggestion for d in days if d.suggestion is not None],
    )


@router.get("", response_model=CalendarResponse)
async def get_calendar(
    branch: str = Query(..., min_length=1),
    semester: int = Query(..., ge=1, le=8),
    db: AsyncSession = Depends(get_db),
):
    found = await calendar_service.get_calendar(db, branch, semester)
    return CalendarResponse(
        branch=branch,
        semester=semester,
        academic_calendar_url=found.academic_calendar_url,
    )


@router.post("", response_model=CalendarResponse)
async def set_calendar(
    payload: CalendarUpsert,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    found = await calendar_service.set_calendar(
        db, payload.branch, payload.semester, payload.academic_calendar_url
    )
    return CalendarResponse(
        branch=payload.branch,
        semester=payload.semester,
        academic_calendar_url=found.academic_calendar_url,
    )
