"""
Subject catalogue endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from stride.core.database import get_db
from stride.modules.auth import require_admin
from stride.schemas.subject import SubjectCreate, SubjectUpdate, SubjectResponse
from stride.services.subject_service import subject_service, subject_to_dict

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("", response_model=List[SubjectResponse])
async def list_subjects(
    branch: Optional[str] = Query(None),
    semester: Optional[int] = Query(None, ge=1, le=8),
    cycle: Optional[str] = Query(None, pattern="^[ABab]$", description="First-year cycle A or B"),
    db: AsyncSession = Depends(get_db),
):
    """
    Subjects with their evaluation components.

    For semesters 1 and 2 a cycle hides the other cycle's subjects.
    """
    return await subject_service.list_subjects(db, branch, semester, cycle)


@router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(
    payload: SubjectCreate,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    subject = await subject_service.create_subject(db, payload)
    return subject_to_dict(subject)


@router.patch("/{subject_id}", response_model=SubjectResponse)
async def update_subject(
    subject_id: str,
    payload: SubjectUpdate,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    subject = await subject_service.update_subject(db, subject_id, payload)
    return subject_to_dict(subject)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(
    subject_id: str,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    await subject_service.delete_subject(db, subject_id)
