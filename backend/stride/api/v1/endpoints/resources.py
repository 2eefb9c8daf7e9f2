"""
Notes / PYQ endpoints

- GET    /resources        - published resources, filtered by subject, type, branch, semester
- POST   /resources        - publish a resource directly (Admin)
- DELETE /resources/{id}   - remove a resource (Admin)
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from stride.core.database import get_db
from stride.modules.auth import require_admin
from stride.schemas.resource import ResourceCreate, ResourceResponse, ResourceTypeEnum
from stride.services.resource_service import resource_service, resource_to_dict

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("", response_model=List[ResourceResponse])
async def list_resources(
    subject_id: Optional[str] = Query(None),
    type: Optional[ResourceTypeEnum] = Query(None, description="NOTES or PYQ"),
    branch: Optional[str] = Query(None),
    semester: Optional[int] = Query(None, ge=1, le=8),
    db: AsyncSession = Depends(get_db),
):
    resources = await resource_service.list_resources(
        db,
        subject_id=subject_id,
        resource_type=type.value if type else None,
        branch=branch,
        semester=semester,
    )
    return [resource_to_dict(r) for r in resources]


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    payload: ResourceCreate,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    resource = await resource_service.create_resource(db, payload)
    return resource_to_dict(resource)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    db: AsyncSession = Depends(get_db),
    admin_email: str = Depends(require_admin),
):
    await resource_service.delete_resource(db, resource_id)
