"""
Attendance API endpoints

- POST /attendance/import     - parse an MIS report (PDF or HTML) and recommend per subject
- POST /attendance/recommend  - recommendation for one attended/total figure
- POST /attendance/overall    - combine lecture and lab percentages
"""
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File, Form, status
from typing import Any, Dict, Optional
import os

from stride.core.config import settings
from stride.core.exceptions import InvalidFileTypeError
from stride.core.logging_config import logger
from stride.core.rate_limiter import report_import_rate_limit
from stride.modules.auth import get_optional_claims
from stride.schemas.attendance import (
    RecommendRequest,
    RecommendationResponse,
    OverallRequest,
    OverallResponse,
    AttendanceRecordResponse,
    AttendanceImportResponse,
)
from stride.services import attendance_calculator as calculator
from stride.services import report_extractor

router = APIRouter(prefix="/attendance", tags=["attendance"])

NO_DATA_MESSAGE = "No attendance data found"


def recommendation_to_dict(recommendation: calculator.Recommendation) -> dict:
    return {
        "kind": recommendation.kind.value,
        "message": recommendation.message,
        "percentage": recommendation.percentage,
        "safe_bunks": recommendation.safe_bunks,
        "needed": recommendation.needed,
    }


def record_response(
    record: report_extractor.AttendanceRecord,
    recommendation: calculator.Recommendation,
) -> AttendanceRecordResponse:
    return AttendanceRecordResponse(
        code=record.code,
        name=record.name,
        session_kind=record.session_kind.value,
        attended=record.attended,
        total=record.total,
        percentage=record.computed_percentage,
        reported_percentage=record.percentage,
        recommendation=RecommendationResponse(**recommendation_to_dict(recommendation)),
    )


def _check_extension(filename: Optional[str], content_type: Optional[str]) -> None:
    if not filename or report_extractor.is_report_html(None, content_type):
        return
    extension = os.path.splitext(filename)[1].lower().lstrip(".")
    if extension and extension not in settings.ALLOWED_REPORT_EXTENSIONS:
        raise InvalidFileTypeError(extension, settings.ALLOWED_REPORT_EXTENSIONS)


@router.post("/import", response_model=AttendanceImportResponse)
@report_import_rate_limit()
async def import_report(
    request: Request,
    file: UploadFile = File(..., description="MIS attendance report (PDF or saved HTML page)"),
    target: int = Form(settings.DEFAULT_TARGET_PERCENTAGE),
    claims: Optional[Dict[str, Any]] = Depends(get_optional_claims),
):
    """
    Parse an uploaded attendance report.

    A readable report without attendance rows returns an empty list and a
    message; an unreadable one fails with 422. A bearer token is optional
    and only changes the rate limit key.
    """
    calculator.validate_target(target)
    _check_extension(file.filename, file.content_type)

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB",
        )

    source = "html" if report_extractor.is_report_html(file.filename, file.content_type) else "pdf"
    records = report_extractor.parse_report(content, file.filename, file.content_type)

    paired = [
        (record_response(record, recommendation), recommendation)
        for record, recommendation in calculator.recommend_records(records, target)
    ]
    rows = [row for row, _ in paired]
    groups = {
        bucket: [row for row, _ in members]
        for bucket, members in calculator.group_by_outcome(paired).items()
    }

    if not rows:
        logger.info(f"No attendance rows found in {file.filename!r}")

    return AttendanceImportResponse(
        source=source,
        filename=file.filename,
        target=target,
        records=rows,
        groups=groups,
        message=None if rows else NO_DATA_MESSAGE,
    )


@router.post("/recommend", response_model=RecommendationResponse)
async def recommend(payload: RecommendRequest):
    """Safe skips or classes needed for one attended/total figure"""
    result = calculator.recommend(
        payload.attended,
        payload.total,
        payload.target,
        calculator.AttendanceKind(payload.kind.value),
    )
    return RecommendationResponse(**recommendation_to_dict(result))


@router.post("/overall", response_model=OverallResponse)
async def overall(payload: OverallRequest):
    percentage = calculator.overall_percentage(payload.lecture_percentage, payload.lab_percentage)
    return OverallResponse(
        percentage=percentage,
        target=payload.target,
        status=calculator.overall_status(percentage, payload.target),
    )
