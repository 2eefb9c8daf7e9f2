# Pydantic schemas
from stride.schemas.attendance import (
    RecommendRequest,
    RecommendationResponse,
    OverallRequest,
    OverallResponse,
    AttendanceRecordResponse,
    AttendanceImportResponse,
)
from stride.schemas.grades import (
    GradeRequest,
    GradeResponse,
    SGPARequest,
    SGPAResponse,
    SubjectGradeResponse,
    SemesterGPA,
    CGPARequest,
    CGPAResponse,
)
from stride.schemas.student import StudentInfoResponse, StudentProfileResponse
from stride.schemas.holiday import HolidayCreate, HolidayResponse
from stride.schemas.calendar import (
    CalendarUpsert,
    CalendarResponse,
    SuggestionResponse,
    DayPlanResponse,
    MonthPlanResponse,
)
from stride.schemas.subject import ComponentSchema, SubjectCreate, SubjectUpdate, SubjectResponse
