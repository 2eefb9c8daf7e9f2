"""
Vacation Planner

Finds single working days that bridge a mid-week holiday and a weekend:
a Tuesday holiday makes Monday worth taking off, a Thursday holiday makes
Friday worth taking off. Either gives a four day break.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Set


MONDAY, TUESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = 0, 1, 3, 4, 5, 6


@dataclass(frozen=True)
class Holiday:
    name: str
    date: date
    is_floating: bool = False
    id: Optional[str] = None


class SuggestionType(str, Enum):
    LEAVE_MON = "leave_mon"
    LEAVE_FRI = "leave_fri"


@dataclass(frozen=True)
class Suggestion:
    date: date
    type: SuggestionType
    reason: str


@dataclass
class DayPlan:
    date: date
    holiday: Optional[Holiday]
    suggestion: Optional[Suggestion]
    is_weekend: bool
    is_vacation_weekend: bool


def _holiday_dates(holidays: Iterable[Holiday]) -> Set[date]:
    return {holiday.date for holiday in holidays}


def _suggestion_on(day: date, dates: Set[date]) -> Optional[Suggestion]:
    if day in dates:
        return None

    weekday = day.weekday()
    if weekday == MONDAY and day + timedelta(days=1) in dates:
        return Suggestion(day, SuggestionType.LEAVE_MON, "Take Monday off for 4 days!")
    if weekday == FRIDAY and day - timedelta(days=1) in dates:
        return Suggestion(day, SuggestionType.LEAVE_FRI, "Take Friday off for 4 days!")
    return None


def suggestion_for(day: date, holidays: Iterable[Holiday]) -> Optional[Suggestion]:
    """Leave suggestion for a single day, or None"""
    return _suggestion_on(day, _holiday_dates(holidays))


def is_vacation_weekend(day: date, holidays: Iterable[Holiday]) -> bool:
    """True for a Saturday or Sunday that sits inside a suggested four day break"""
    weekday = day.weekday()
    if weekday not in (SATURDAY, SUNDAY):
        return False

    dates = _holiday_dates(holidays)

    next_monday = day + timedelta(days=2 if weekday == SATURDAY else 1)
    suggestion = _suggestion_on(next_monday, dates)
    if suggestion and suggestion.type == SuggestionType.LEAVE_MON:
        return True

    previous_friday = day - timedelta(days=1 if weekday == SATURDAY else 2)
    suggestion = _suggestion_on(previous_friday, dates)
    return bool(suggestion and suggestion.type == SuggestionType.LEAVE_FRI)


def plan_month(year: int, month: int, holidays: Iterable[Holiday]) -> List[DayPlan]:
    holidays = list(holidays)
    by_date = {holiday.date: holiday for holiday in holidays}
    dates = set(by_date)
    _, days_in_month = calendar.monthrange(year, month)

    plan = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        plan.append(DayPlan(
            date=day,
            holiday=by_date.get(day),
            suggestion=_suggestion_on(day, dates),
            is_weekend=day.weekday() in (SATURDAY, SUNDAY),
            is_vacation_weekend=is_vacation_weekend(day, holidays),
        ))
    return plan


def upcoming_holidays(holidays: Iterable[Holiday], today: Optional[date] = None, limit: int = 5) -> List[Holiday]:
    """Holidays on or after today, soonest first"""
    today = today or date.today()
    upcoming = sorted((h for h in holidays if h.date >= today), key=lambda h: h.date)
    return upcoming[:limit]
