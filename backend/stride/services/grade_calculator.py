"""
Grade Calculator

Maps weighted percentages to letter grades and aggregates them into SGPA
and CGPA. Thresholds are compared against the raw score with no rounding,
so 90.99 is an A+ and not an O.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from stride.core.exceptions import InvalidMarksError


# (lower bound, grade, points), highest first
GRADE_TABLE: Tuple[Tuple[float, str, int], ...] = (
    (91, "O", 10),
    (81, "A+", 9),
    (71, "A", 8),
    (61, "B+", 7),
    (51, "B", 6),
    (46, "C", 5),
    (40, "P", 4),
)

FAIL_GRADE = ("F", 0)

GRADE_POINTS: Dict[str, int] = {grade: points for _, grade, points in GRADE_TABLE}
GRADE_POINTS["F"] = 0
GRADE_POINTS["Ab"] = 0


def grade_for(percentage: float) -> Tuple[str, int]:
    for lower_bound, grade, points in GRADE_TABLE:
        if percentage >= lower_bound:
            return grade, points
    return FAIL_GRADE


@dataclass
class EvaluationComponent:
    type: str
    weight: float
    max_marks: float


@dataclass
class GradedSubject:
    """A subject as seen by the calculator"""
    code: str
    name: str
    credits: int
    components: List[EvaluationComponent] = field(default_factory=list)


@dataclass
class SubjectResult:
    code: str
    name: str
    credits: int
    score: float
    grade: str
    points: int


@dataclass
class SemesterResult:
    sgpa: float
    total_credits: int
    subjects: List[SubjectResult]


def subject_score(
    components: Sequence[EvaluationComponent],
    marks: Optional[Mapping[int, float]] = None,
) -> float:
    """
    Weighted percentage for one subject.

    marks maps component position to marks scored. A component without
    marks counts as zero.
    """
    marks = marks or {}
    total = 0.0

    for position, component in enumerate(components):
        scored = marks.get(position)
        if scored is None:
            continue
        if scored < 0 or scored > component.max_marks:
            raise InvalidMarksError(component.type, scored, component.max_marks)
        if component.max_marks <= 0:
            continue
        total += (scored / component.max_marks) * component.weight

    return total


def calculate_sgpa(
    subjects: Iterable[GradedSubject],
    marks: Optional[Mapping[str, Mapping[int, float]]] = None,
) -> SemesterResult:
    """
    Credit-weighted grade point average of a semester.

    Subjects with zero credits are graded but left out of the average.
    """
    marks = marks or {}
    results: List[SubjectResult] = []
    weighted_points = 0
    total_credits = 0

    for subject in subjects:
        score = subject_score(subject.components, marks.get(subject.code))
        grade, points = grade_for(score)
        results.append(SubjectResult(
            code=subject.code,
            name=subject.name,
            credits=subject.credits,
            score=score,
            grade=grade,
            points=points,
        ))

        if subject.credits > 0:
            weighted_points += subject.credits * points
            total_credits += subject.credits

    sgpa = 0.0 if total_credits == 0 else round(weighted_points / total_credits, 2)
    return SemesterResult(sgpa=sgpa, total_credits=total_credits, subjects=results)


def calculate_cgpa(semesters: Iterable[Tuple[float, int]]) -> float:
    """Credit-weighted mean of (sgpa, credits) pairs"""
    weighted = 0.0
    total_credits = 0
    for sgpa, credits in semesters:
        if credits <= 0:
            continue
        weighted += sgpa * credits
        total_credits += credits

    if total_credits == 0:
        return 0.0
    return round(weighted / total_credits, 2)
