"""
Resource Schemas - notes / PYQ listings and contribution moderation
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class ResourceTypeEnum(str, Enum):
    NOTES = "NOTES"
    PYQ = "PYQ"


class ContributionStatusEnum(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReviewAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"


def _check_url(v: str) -> str:
    v = v.strip()
    if not v.lower().startswith(("http://", "https://")):
        raise ValueError("URL must start with http:// or https://")
    return v


class ResourceCreate(BaseModel):
    """Schema for publishing a resource directly (Admin only)"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    type: ResourceTypeEnum
    url: str = Field(..., max_length=2048)
    subject_id: str
    author: Optional[str] = Field(None, max_length=255, description="Defaults to Admin")

    @field_validator('url')
    @classmethod
    def check_url(cls, v):
        return _check_url(v)


class ResourceResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    type: ResourceTypeEnum
    url: str
    author: str
    subject_id: str
    subject_code: str
    subject_name: str
    branch: str
    semester: int
    uploaded_at: datetime


# ============== Contributions ==============

class ContributionCreate(BaseModel):
    """Schema for a student submission; the submitter comes from the token"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    type: ResourceTypeEnum
    url: str = Field(..., max_length=2048)
    subject_id: str

    @field_validator('url')
    @classmethod
    def check_url(cls, v):
        return _check_url(v)


class ContributionReview(BaseModel):
    action: ReviewAction


class ContributionResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    type: ResourceTypeEnum
    url: str
    status: ContributionStatusEnum
    subject_id: str
    subject_code: str
    subject_name: str
    submitted_by: str
    reviewed_by: Optional[str] = None
    created_at: datetime
    reviewed_at: Optional[datetime] = None


class ContributionReviewResponse(BaseModel):
    """Outcome of a review; a rejected contribution no longer exists"""
    id: str
    status: ContributionStatusEnum
    resource: Optional[ResourceResponse] = None
