"""
Calendar Schemas - academic calendar links and vacation plans
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date

from stride.schemas.holiday import HolidayResponse


class CalendarUpsert(BaseModel):
    """Schema for setting a semester's academic calendar (Admin only)"""
    branch: str = Field(..., min_length=1, max_length=255)
    semester: int = Field(..., ge=1, le=8)
    academic_calendar_url: str = Field(..., min_length=1, description="Link to the calendar document")


class CalendarResponse(BaseModel):
    branch: str
    semester: int
    academic_calendar_url: Optional[str] = None


class SuggestionResponse(BaseModel):
    date: date
    type: str  # leave_mon / leave_fri
    reason: str


class DayPlanResponse(BaseModel):
    date: date
    holiday: Optional[HolidayResponse] = None
    suggestion: Optional[SuggestionResponse] = None
    is_weekend: bool
    is_vacation_weekend: bool


class MonthPlanResponse(BaseModel):
    year: int
    month: int
    days: List[DayPlanResponse]
    suggestions: List[SuggestionResponse]
