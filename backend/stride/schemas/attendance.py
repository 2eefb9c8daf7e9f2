"""
Attendance Schemas - Request/Response models for report import and recommendations
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from enum import Enum


class SessionKindEnum(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"
    TUTORIAL = "Tutorial"


class AttendanceKindEnum(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"
    TUTORIAL = "Tutorial"
    OVERALL = "Overall"


class RecommendationKindEnum(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"
    NEUTRAL = "neutral"


# ============== Recommendation ==============

class RecommendRequest(BaseModel):
    """Schema for a single attendance figure"""
    attended: int = Field(..., ge=0, description="Classes attended")
    total: int = Field(..., ge=0, description="Classes held so far")
    target: int = Field(default=75, ge=1, le=100, description="Target attendance percentage")
    kind: AttendanceKindEnum = Field(default=AttendanceKindEnum.LECTURE, description="Lecture, Lab, Tutorial or Overall")


class RecommendationResponse(BaseModel):
    kind: RecommendationKindEnum
    message: str
    percentage: int
    safe_bunks: Optional[int] = None
    needed: Optional[int] = None


class OverallRequest(BaseModel):
    """Schema for combining lecture and lab percentages"""
    lecture_percentage: int = Field(..., ge=0, le=100)
    lab_percentage: Optional[int] = Field(None, ge=0, le=100, description="Omit when the subject has no lab")
    target: int = Field(default=75, ge=1, le=100)


class OverallResponse(BaseModel):
    percentage: int
    target: int
    status: str  # Safe / Critical


# ============== Report import ==============

class AttendanceRecordResponse(BaseModel):
    code: str
    name: str
    session_kind: SessionKindEnum
    attended: int
    total: int
    percentage: int = Field(..., description="Recomputed from attended and total")
    reported_percentage: int = Field(..., description="Figure printed in the report, not trusted")
    recommendation: RecommendationResponse


class AttendanceImportResponse(BaseModel):
    """Parsed report with one recommendation per row"""
    source: str  # html / pdf
    filename: Optional[str] = None
    target: int
    records: List[AttendanceRecordResponse]
    groups: Dict[str, List[AttendanceRecordResponse]] = Field(
        default_factory=dict,
        description="Records bucketed into critical, safe and maintain",
    )
    message: Optional[str] = None
