"""
Resource Service - notes / PYQ catalogue and contribution moderation

Handles:
- Listing published resources by subject, type, branch and semester
- Direct publishing and removal by the admin
- Student contributions: submit, list pending, approve or reject
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
from typing import Optional, List

from stride.core.exceptions import (
    ContributionAlreadyReviewedError,
    ContributionNotFoundError,
    StudyResourceNotFoundError,
)
from stride.core.logging_config import logger
from stride.models.academic import Branch, Semester, Subject
from stride.models.resource import Contribution, ContributionStatus, Resource, ResourceType
from stride.schemas.resource import ContributionCreate, ResourceCreate, ReviewAction
from stride.services.subject_service import subject_service


DEFAULT_AUTHOR = "Admin"


def resource_to_dict(resource: Resource) -> dict:
    subject = resource.subject
    return {
        "id": resource.id,
        "title": resource.title,
        "description": resource.description,
        "type": ResourceType(resource.type).value,
        "url": resource.url,
        "author": resource.author,
        "subject_id": subject.id,
        "subject_code": subject.code,
        "subject_name": subject.name,
        "branch": subject.semester.branch.name,
        "semester": subject.semester.number,
        "uploaded_at": resource.uploaded_at,
    }


def contribution_to_dict(contribution: Contribution) -> dict:
    return {
        "id": contribution.id,
        "title": contribution.title,
        "description": contribution.description,
        "type": ResourceType(contribution.type).value,
        "url": contribution.url,
        "status": ContributionStatus(contribution.status).value,
        "subject_id": contribution.subject.id,
        "subject_code": contribution.subject.code,
        "subject_name": contribution.subject.name,
        "submitted_by": contribution.submitted_by,
        "reviewed_by": contribution.reviewed_by,
        "created_at": contribution.created_at,
        "reviewed_at": contribution.reviewed_at,
    }


class ResourceService:
    """Service for shared notes and previous-year papers"""

    # ==================== RESOURCES ====================

    async def list_resources(
        self,
        db: AsyncSession,
        subject_id: Optional[str] = None,
        resource_type: Optional[str] = None,
        branch: Optional[str] = None,
        semester: Optional[int] = None,
    ) -> List[Resource]:
        """Published resources, newest first"""
        query = (
            select(Resource)
            .join(Subject, Resource.subject_id == Subject.id)
            .join(Semester, Subject.semester_id == Semester.id)
            .join(Branch, Semester.branch_id == Branch.id)
            .order_by(Resource.uploaded_at.desc())
        )
        if subject_id:
            query = query.where(Resource.subject_id == subject_id)
        if resource_type:
            query = query.where(Resource.type == ResourceType(resource_type))
        if branch:
            query = query.where(Branch.name == branch)
        if semester:
            query = query.where(Semester.number == semester)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_resource(self, db: AsyncSession, resource_id: str) -> Resource:
        result = await db.execute(select(Resource).where(Resource.id == resource_id))
        resource = result.scalar_one_or_none()
        if resource is None:
            raise StudyResourceNotFoundError(resource_id)
        return resource

    async def create_resource(self, db: AsyncSession, data: ResourceCreate) -> Resource:
        subject = await subject_service.get_subject(db, data.subject_id)

        resource = Resource(
            title=data.title,
            description=data.description,
            type=ResourceType(data.type.value),
            url=data.url,
            author=data.author or DEFAULT_AUTHOR,
            subject=subject,
        )
        db.add(resource)
        await db.flush()

        logger.info(f"Published {resource.type.value} '{resource.title}' for {subject.code}")
        return resource

    async def delete_resource(self, db: AsyncSession, resource_id: str) -> None:
        resource = await self.get_resource(db, resource_id)
        await db.delete(resource)
        await db.flush()
        logger.info(f"Deleted resource '{resource.title}'")

    # ==================== CONTRIBUTIONS ====================

    async def submit_contribution(
        self,
        db: AsyncSession,
        data: ContributionCreate,
        submitted_by: str,
    ) -> Contribution:
        subject = await subject_service.get_subject(db, data.subject_id)

        contribution = Contribution(
            title=data.title,
            description=data.description,
            type=ResourceType(data.type.value),
            url=data.url,
            status=ContributionStatus.PENDING,
            submitted_by=submitted_by,
            subject=subject,
        )
        db.add(contribution)
        await db.flush()

        logger.info(f"Contribution '{contribution.title}' for {subject.code} submitted by {submitted_by}")
        return contribution

    async def list_contributions(
        self,
        db: AsyncSession,
        status: ContributionStatus = ContributionStatus.PENDING,
    ) -> List[Contribution]:
        """Contributions in one status, newest first"""
        result = await db.execute(
            select(Contribution)
            .where(Contribution.status == ContributionStatus(status))
            .order_by(Contribution.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_contribution(self, db: AsyncSession, contribution_id: str) -> Contribution:
        result = await db.execute(select(Contribution).where(Contribution.id == contribution_id))
        contribution = result.scalar_one_or_none()
        if contribution is None:
            raise ContributionNotFoundError(contribution_id)
        return contribution

    async def review_contribution(
        self,
        db: AsyncSession,
        contribution_id: str,
        action: ReviewAction,
        reviewer: str,
    ) -> Optional[Resource]:
        """
        Approve or reject a pending contribution.

        Approval publishes a Resource credited to the submitter and returns it.
        Rejection deletes the contribution and returns None.
        """
        contribution = await self.get_contribution(db, contribution_id)
        status = ContributionStatus(contribution.status)
        if status != ContributionStatus.PENDING:
            raise ContributionAlreadyReviewedError(contribution_id, status.value)

        if ReviewAction(action) == ReviewAction.REJECT:
            await db.delete(contribution)
            await db.flush()
            logger.info(f"Rejected contribution '{contribution.title}' by {contribution.submitted_by}")
            return None

        resource = Resource(
            title=contribution.title,
            description=contribution.description,
            type=ResourceType(contribution.type),
            url=contribution.url,
            author=contribution.submitted_by,
            subject=contribution.subject,
        )
        db.add(resource)

        contribution.status = ContributionStatus.APPROVED
        contribution.reviewed_by = reviewer
        contribution.reviewed_at = datetime.utcnow()
        await db.flush()

        logger.info(f"Approved contribution '{contribution.title}' by {contribution.submitted_by}")
        return resource


resource_service = ResourceService()
