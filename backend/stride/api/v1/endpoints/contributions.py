"""
Contribution moderation endpoints

Students submit links to notes or papers; the admin approves them into the
resource list or rejects (deletes) them.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stride.core.database import get_db
from stride.modules.auth import get_current_email, require_admin
from stride.models.resource import ContributionStatus
from stride.schemas.resource import (
    ContributionCreate,
    ContributionResponse,
    ContributionReview,
    ContributionReviewResponse,
    ContributionStatusEnum,
)
from stride.services.resource_service import (
    contribution_to_dict,
    resource_service,
    resource_to_dict,
)

router = APIRouter(prefix="/contributions", tags=["contributions"])


@router.post("", response_model=ContributionResponse, status_code=status.HTTP_201_CREATED)
async def submit_contribution(
    payload: ContributionCreate,
    db: AsyncSession = Depends(get_db),
    email: str = Depends(get_current_email),
):
    """Queue a note or paper for review, credited to the signed-in student"""
    contribution = await resource_service.submit_contribution(db, payload, email)
    return contribution_to_dict(contribution)


@router.get("", response_model=List[ContributionResponse])
async def list_contributions(
    status_filter: ContributionStatusEnum = Query(ContributionStatusEnum.PENDING, alias="status"),
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    contributions = await resource_service.list_contributions(db, ContributionStatus(status_filter.value))
    return [contribution_to_dict(c) for c in contributions]


@router.patch("/{contribution_id}", response_model=ContributionReviewResponse)
async def review_contribution(
    contribution_id: str,
    payload: ContributionReview,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    resource = await resource_service.review_contribution(db, contribution_id, payload.action, admin_email)
    if resource is None:
        return ContributionReviewResponse(id=contribution_id, status=ContributionStatusEnum.REJECTED)
    return ContributionReviewResponse(
        id=contribution_id,
        status=ContributionStatusEnum.APPROVED,
        resource=resource_to_dict(resource),
    )
