"""
Student profile endpoints
"""
from fastapi import APIRouter, Depends, Query
from dataclasses import asdict
from datetime import date
from typing import Optional

from stride.core.exceptions import StudentNotFoundError
from stride.modules.auth import get_current_email
from stride.schemas.student import StudentProfileResponse
from stride.services.student_resolver import resolve_student

router = APIRouter(prefix="/students", tags=["students"])


def _profile_or_404(email: str, today: Optional[date]) -> StudentProfileResponse:
    profile = resolve_student(email, today)
    if profile is None:
        raise StudentNotFoundError(email)
    return StudentProfileResponse.model_validate(asdict(profile))


@router.get("/resolve", response_model=StudentProfileResponse)
async def resolve(
    email: str = Query(..., min_length=3),
    on: Optional[date] = Query(None, description="Resolve as of this day instead of today"),
):
    """Branch, admission year and semester for an institute email"""
    return _profile_or_404(email, on)


@router.get("/me", response_model=StudentProfileResponse)
async def me(email: str = Depends(get_current_email)):
    return _profile_or_404(email, None)
