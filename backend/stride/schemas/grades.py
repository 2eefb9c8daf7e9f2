"""
Grade Schemas - grade lookup, SGPA and CGPA
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Dict


class GradeRequest(BaseModel):
    percentage: float = Field(..., ge=0, description="Weighted subject score")


class GradeResponse(BaseModel):
    percentage: float
    grade: str
    points: int


class SGPARequest(BaseModel):
    """Marks keyed by subject code, then by component position"""
    branch: str = Field(..., min_length=1, max_length=255)
    semester: int = Field(..., ge=1, le=8)
    marks: Dict[str, Dict[int, float]] = Field(default_factory=dict)

    @field_validator('marks')
    @classmethod
    def uppercase_codes(cls, v):
        return {code.upper().strip(): components for code, components in v.items()}


class SubjectGradeResponse(BaseModel):
    code: str
    name: str
    credits: int
    score: float
    grade: str
    points: int


class SGPAResponse(BaseModel):
    branch: str
    semester: int
    sgpa: float
    total_credits: int
    subjects: List[SubjectGradeResponse]


class SemesterGPA(BaseModel):
    sgpa: float = Field(..., ge=0, le=10)
    credits: int = Field(..., ge=0)


class CGPARequest(BaseModel):
    semesters: List[SemesterGPA] = Field(..., min_length=1)


class CGPAResponse(BaseModel):
    cgpa: float
    total_credits: int
