from pydantic import BaseModel, ConfigDict
from typing import List


class StudentInfoResponse(BaseModel):
    branch: str
    admission_year: int
    roll_no: str


class StudentProfileResponse(BaseModel):
    """Branch and semester derived from an institute email"""
    email: str
    info: StudentInfoResponse
    current_semester: int
    eligible_semesters: List[int]
    academic_year: str
    is_institute_account: bool = False

    model_config = ConfigDict(from_attributes=True)
