"""
Student Resolver

Derives branch, admission year and current semester from an institute
email address such as 24bce167@nirmauni.ac.in.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from stride.core.config import settings


BRANCH_MAPPING = {
    "BCE": "Computer Science Engineering",
    "BCS": "Computer Science Engineering",
    "BEL": "Electrical Engineering",
    "BEC": "Electronics & Communication Engineering",
    "BME": "Mechanical Engineering",
    "BCL": "Civil Engineering",
    "BCH": "Chemical Engineering",
    "BEI": "Electronics & Instrumentation Engineering",
    "BAM": "Artificial Intelligence & Machine Learning",
}

# 2-digit year, 3-letter branch code, 3-digit id; the domain is not checked
ROLL_NUMBER_PATTERN = re.compile(r"^(\d{2})([a-z]{3})(\d{3})")

ODD_SEMESTER_START_MONTH = 7


@dataclass
class StudentInfo:
    branch: str
    admission_year: int
    roll_no: str


@dataclass
class StudentProfile:
    email: str
    info: StudentInfo
    current_semester: int
    eligible_semesters: List[int]
    academic_year: str
    is_institute_account: bool = False


def is_institute_email(email: Optional[str]) -> bool:
    if not email or "@" not in email:
        return False
    domain = email.lower().strip().rsplit("@", 1)[1]
    return domain in settings.STUDENT_EMAIL_DOMAINS


def parse_student_email(email: Optional[str]) -> Optional[StudentInfo]:
    if not email:
        return None

    normalized = email.lower().strip()
    if normalized == settings.ADMIN_EMAIL.lower():
        return None

    match = ROLL_NUMBER_PATTERN.match(normalized)
    if not match:
        return None

    year_digits, branch_code, student_id = match.groups()
    branch = BRANCH_MAPPING.get(branch_code.upper())
    if not branch:
        return None

    return StudentInfo(
        branch=branch,
        admission_year=2000 + int(year_digits),
        roll_no=f"{year_digits}{branch_code}{student_id}",
    )


def calculate_semester(admission_year: int, today: Optional[date] = None) -> int:
    """
    Semester number for a given day.

    July to December is the odd semester of the academic year, January to
    June the even one. Admission years in the future resolve to 1.
    """
    today = today or date.today()
    year_diff = today.year - admission_year

    if year_diff < 0:
        return 1

    if today.month >= ODD_SEMESTER_START_MONTH:
        semester = year_diff * 2 + 1
    else:
        semester = year_diff * 2

    return max(1, semester)


def eligible_semesters(admission_year: int, today: Optional[date] = None) -> List[int]:
    """Both semesters of the current academic year"""
    current = calculate_semester(admission_year, today)
    odd = -(-current // 2) * 2 - 1
    return [odd, odd + 1]


def academic_year_label(today: Optional[date] = None) -> str:
    today = today or date.today()
    start = today.year if today.month >= ODD_SEMESTER_START_MONTH else today.year - 1
    return f"{start}-{(start + 1) % 100:02d}"


def resolve_student(email: Optional[str], today: Optional[date] = None) -> Optional[StudentProfile]:
    info = parse_student_email(email)
    if info is None:
        return None

    today = today or date.today()
    return StudentProfile(
        email=email.lower().strip(),
        info=info,
        current_semester=calculate_semester(info.admission_year, today),
        eligible_semesters=eligible_semesters(info.admission_year, today),
        academic_year=academic_year_label(today),
        is_institute_account=is_institute_email(email),
    )
