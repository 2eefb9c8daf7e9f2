"""
Attendance Calculator

Pure functions that answer "how many classes can I skip" and "how many do
I have to attend" for a target attendance percentage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from stride.core.exceptions import InvalidTargetError


MIN_TARGET = 1
MAX_TARGET = 100

# Two lectures are worth one lab when phrasing skip counts
LECTURES_PER_LAB = 2


class AttendanceKind(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"
    TUTORIAL = "Tutorial"
    OVERALL = "Overall"


class RecommendationKind(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Recommendation:
    kind: RecommendationKind
    message: str
    percentage: int
    safe_bunks: Optional[int] = None
    needed: Optional[int] = None


# Outcome buckets used when a whole report is rendered
BUCKET_BY_KIND = {
    RecommendationKind.DANGER: "critical",
    RecommendationKind.SUCCESS: "safe",
    RecommendationKind.NEUTRAL: "maintain",
}


def attendance_percentage(attended: int, total: int) -> int:
    """ceil(attended / total * 100), or 0 when nothing was held yet"""
    if total <= 0:
        return 0
    return -(-attended * 100 // total)


def validate_target(target: int) -> int:
    if isinstance(target, bool) or not isinstance(target, int):
        raise InvalidTargetError(target)
    if not MIN_TARGET <= target <= MAX_TARGET:
        raise InvalidTargetError(target)
    return target


def clamp_target(value: int) -> int:
    """Clamp free-form input into the accepted target range"""
    return max(MIN_TARGET, min(MAX_TARGET, int(value)))


def _noun(kind: AttendanceKind, count: int) -> str:
    if kind == AttendanceKind.OVERALL:
        return "class" if count == 1 else "classes"
    return kind.value if count == 1 else f"{kind.value}s"


def _bunk_message(kind: AttendanceKind, bunks: int) -> str:
    if kind == AttendanceKind.LECTURE and bunks >= LECTURES_PER_LAB:
        labs = bunks // LECTURES_PER_LAB
        return f"You can bunk {bunks} Lectures / {labs} {_noun(AttendanceKind.LAB, labs)} safely."
    if kind == AttendanceKind.LAB and bunks >= 1:
        lectures = bunks * LECTURES_PER_LAB
        return f"You can bunk {bunks} {_noun(AttendanceKind.LAB, bunks)} / {lectures} Lectures safely."
    return f"You can bunk {bunks} {_noun(kind, bunks)} safely."


def recommend(
    attended: int,
    total: int,
    target: int,
    kind: AttendanceKind = AttendanceKind.LECTURE,
) -> Recommendation:
    """
    Recommendation for one (attended, total, target) triple.

    At or above target the result counts safe skips; below it counts the
    consecutive classes needed. A 100% target that is already missed can
    never be reached again, so it is reported as danger without a count.
    """
    validate_target(target)
    kind = AttendanceKind(kind)
    percentage = attendance_percentage(attended, total)

    if percentage >= target:
        bunks = (attended * 100 - target * total) // target
        if bunks <= 0:
            return Recommendation(RecommendationKind.NEUTRAL, "Maintain attendance.", percentage, safe_bunks=0)
        return Recommendation(
            RecommendationKind.SUCCESS,
            _bunk_message(kind, bunks),
            percentage,
            safe_bunks=bunks,
        )

    if target == MAX_TARGET:
        return Recommendation(
            RecommendationKind.DANGER,
            f"Attend every remaining {_noun(kind, 2)}; 100% can no longer be reached.",
            percentage,
        )

    needed = -(-(target * total - 100 * attended) // (100 - target))
    if needed <= 0:
        return Recommendation(RecommendationKind.NEUTRAL, "On track.", percentage, needed=0)
    return Recommendation(
        RecommendationKind.DANGER,
        f"Attend next {needed} {_noun(kind, needed)} to reach {target}%.",
        percentage,
        needed=needed,
    )


def overall_percentage(lecture_percentage: int, lab_percentage: Optional[int] = None) -> int:
    """Mean of lecture and lab percentages rounded up; lecture alone without a lab"""
    if lab_percentage is None:
        return lecture_percentage
    return -(-(lecture_percentage + lab_percentage) // 2)


def overall_status(percentage: int, target: int) -> str:
    return "Safe" if percentage >= target else "Critical"


def recommend_records(records: Iterable, target: int) -> List[Tuple[object, Recommendation]]:
    """Pair every extracted record with its recommendation"""
    validate_target(target)
    results = []
    for record in records:
        kind = AttendanceKind(record.session_kind.value)
        results.append((record, recommend(record.attended, record.total, target, kind)))
    return results


def group_by_outcome(results: Iterable[Tuple[object, Recommendation]]) -> Dict[str, list]:
    """Split (record, recommendation) pairs into critical / safe / maintain"""
    groups: Dict[str, list] = {bucket: [] for bucket in BUCKET_BY_KIND.values()}
    for record, recommendation in results:
        groups[BUCKET_BY_KIND[recommendation.kind]].append((record, recommendation))
    return groups
