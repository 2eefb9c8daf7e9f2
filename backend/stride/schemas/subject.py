"""
Subject Schemas - Request/Response models for the subject catalogue
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List


class ComponentSchema(BaseModel):
    """One weighted evaluation component"""
    type: str = Field(..., min_length=1, max_length=100, description="e.g. Mid Sem, Lab Evaluation")
    weight: float = Field(..., ge=0, le=100, description="Share of the final score in percent")
    max_marks: float = Field(..., gt=0)

    model_config = ConfigDict(from_attributes=True)


class SubjectCreate(BaseModel):
    """Schema for creating a subject (Admin only)"""
    code: str = Field(..., min_length=2, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)
    credits: int = Field(default=0, ge=0, le=20)
    branch: str = Field(..., min_length=1, max_length=255, description="Branch name, created when missing")
    semester: int = Field(..., ge=1, le=8)
    attendance_threshold: int = Field(default=75, ge=1, le=100)
    components: List[ComponentSchema] = Field(default_factory=list)

    @field_validator('code')
    @classmethod
    def uppercase_code(cls, v):
        return v.upper().strip()


class SubjectUpdate(BaseModel):
    """Schema for updating a subject; components replace the existing list when given"""
    code: Optional[str] = Field(None, min_length=2, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    credits: Optional[int] = Field(None, ge=0, le=20)
    attendance_threshold: Optional[int] = Field(None, ge=1, le=100)
    components: Optional[List[ComponentSchema]] = None

    @field_validator('code')
    @classmethod
    def uppercase_code(cls, v):
        return v.upper().strip() if v else v


class SubjectResponse(BaseModel):
    id: str
    code: str
    name: str
    credits: int
    attendance_threshold: int
    branch: str
    semester: int
    components: List[ComponentSchema] = []
