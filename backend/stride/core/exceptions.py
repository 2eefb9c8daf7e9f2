"""
Custom Exceptions for Stride
============================

Raise these instead of generic Exception so the API layer can map them
to proper status codes and user-facing messages.

Usage:
    from stride.core.exceptions import HolidayNotFoundError, UnreadableReportError

    if not holiday:
        raise HolidayNotFoundError(holiday_id)

    try:
        records = parse_report(content, filename, content_type)
    except UnreadableReportError as e:
        logger.warning(f"Report rejected: {e}")
        raise
"""

from typing import Optional, Any, Dict, List


class StrideError(Exception):
    """Base exception for all Stride errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(StrideError):
    """User authentication failed"""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(StrideError):
    """User not authorized for this action"""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(StrideError):
    """Base class for not found errors"""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class HolidayNotFoundError(ResourceNotFoundError):
    """Holiday not found"""

    def __init__(self, holiday_id: str):
        super().__init__("Holiday", holiday_id)


class SubjectNotFoundError(ResourceNotFoundError):
    """Subject not found"""

    def __init__(self, subject_id: str):
        super().__init__("Subject", subject_id)


class CalendarNotFoundError(ResourceNotFoundError):
    """No academic calendar configured for a branch/semester"""

    def __init__(self, branch: str, semester: int):
        super().__init__("Calendar", f"{branch}/{semester}")
        self.message = f"No academic calendar for {branch} semester {semester}"


class StudentNotFoundError(ResourceNotFoundError):
    """Email does not describe a student roll number"""

    def __init__(self, email: str):
        super().__init__("Student", email)
        self.message = "Email does not match a known student roll number"


class StudyResourceNotFoundError(ResourceNotFoundError):
    """Published note or PYQ not found"""

    def __init__(self, resource_id: str):
        super().__init__("Resource", resource_id)


class ContributionNotFoundError(ResourceNotFoundError):
    """Submitted contribution not found (or already rejected)"""

    def __init__(self, contribution_id: str):
        super().__init__("Contribution", contribution_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(StrideError):
    """Input validation failed"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, file_type: str, allowed_types: List[str]):
        super().__init__(
            f"File type '{file_type}' not allowed. Allowed: {', '.join(allowed_types)}"
        )
        self.code = "INVALID_FILE_TYPE"
        self.details = {"file_type": file_type, "allowed_types": allowed_types}


class InvalidTargetError(ValidationError):
    """Target attendance percentage out of range"""

    def __init__(self, target: Any):
        super().__init__(f"Target percentage must be an integer between 1 and 100, got {target!r}", field="target")
        self.code = "INVALID_TARGET"


class InvalidMarksError(ValidationError):
    """Scored marks outside the component's range"""

    def __init__(self, component: str, scored: float, max_marks: float):
        super().__init__(
            f"Marks for '{component}' must be between 0 and {max_marks}, got {scored}",
            field="marks"
        )
        self.code = "INVALID_MARKS"
        self.details.update({"component": component, "scored": scored, "max_marks": max_marks})


class ContributionAlreadyReviewedError(ValidationError):
    """Only pending contributions can be approved or rejected"""

    def __init__(self, contribution_id: str, status: str):
        super().__init__(f"Contribution '{contribution_id}' is already {status.lower()}", field="status")
        self.code = "CONTRIBUTION_ALREADY_REVIEWED"
        self.details.update({"contribution_id": contribution_id, "status": status})


# ============================================
# Report Parsing Errors
# ============================================

class ReportParseError(StrideError):
    """Attendance report could not be processed"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, code="REPORT_PARSE_ERROR")
        if source:
            self.details["source"] = source


class UnreadableReportError(ReportParseError):
    """Report could not be decoded or parsed at all"""

    def __init__(self, source: str, reason: str = ""):
        super().__init__("Failed to parse the attendance report", source=source)
        self.code = "UNREADABLE_REPORT"
        if reason:
            self.details["reason"] = reason[:500]


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: StrideError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
