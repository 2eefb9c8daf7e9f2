"""
Grade API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stride.core.database import get_db
from stride.schemas.grades import (
    GradeRequest,
    GradeResponse,
    SGPARequest,
    SGPAResponse,
    SubjectGradeResponse,
    CGPARequest,
    CGPAResponse,
)
from stride.services import grade_calculator
from stride.services.subject_service import subject_service

router = APIRouter(prefix="/grades", tags=["grades"])


@router.post("/grade", response_model=GradeResponse)
async def grade(payload: GradeRequest):
    """Letter grade and grade point for a weighted percentage"""
    letter, points = grade_calculator.grade_for(payload.percentage)
    return GradeResponse(percentage=payload.percentage, grade=letter, points=points)


@router.post("/sgpa", response_model=SGPAResponse)
async def sgpa(payload: SGPARequest, db: AsyncSession = Depends(get_db)):
    """
    SGPA for a branch and semester.

    Subjects and their evaluation components come from the catalogue; marks
    are keyed by subject code and component position.
    """
    subjects = await subject_service.get_graded_subjects(db, payload.branch, payload.semester)
    result = grade_calculator.calculate_sgpa(subjects, payload.marks)

    return SGPAResponse(
        branch=payload.branch,
        semester=payload.semester,
        sgpa=result.sgpa,
        total_credits=result.total_credits,
        subjects=[
            SubjectGradeResponse(
                code=s.code,
                name=s.name,
                credits=s.credits,
                score=round(s.score, 2),
                grade=s.grade,
                points=s.points,
            )
            for s in result.subjects
        ],
    )


@router.post("/cgpa", response_model=CGPAResponse)
async def cgpa(payload: CGPARequest):
    pairs = [(semester.sgpa, semester.credits) for semester in payload.semesters]
    return CGPAResponse(
        cgpa=grade_calculator.calculate_cgpa(pairs),
        total_credits=sum(credits for _, credits in pairs),
    )
