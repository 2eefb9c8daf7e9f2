"""
Response Renderer - terminal output for the Stride CLI
"""

from typing import Dict, List, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from stride.services.attendance_calculator import Recommendation, RecommendationKind
from stride.services.report_extractor import AttendanceRecord
from stride.services.student_resolver import StudentProfile


STYLE_BY_KIND = {
    RecommendationKind.SUCCESS: "green",
    RecommendationKind.DANGER: "red",
    RecommendationKind.NEUTRAL: "yellow",
}

GROUP_TITLES = {
    "critical": "Critical",
    "safe": "Safe to bunk",
    "maintain": "Maintain",
}


def recommendation_text(recommendation: Recommendation) -> str:
    style = STYLE_BY_KIND[recommendation.kind]
    return f"[{style}]{recommendation.message}[/{style}]"


def render_report(
    console: Console,
    groups: Dict[str, List[Tuple[AttendanceRecord, Recommendation]]],
    target: int,
) -> None:
    """One table per non-empty outcome group"""
    for bucket, title in GROUP_TITLES.items():
        rows = groups.get(bucket) or []
        if not rows:
            continue

        table = Table(title=f"{title} ({len(rows)})", box=ROUNDED, title_justify="left")
        table.add_column("Code", style="cyan", no_wrap=True)
        table.add_column("Subject")
        table.add_column("Type")
        table.add_column("Attended", justify="right")
        table.add_column("%", justify="right")
        table.add_column(f"Advice (target {target}%)")

        for record, recommendation in rows:
            table.add_row(
                record.code,
                record.name,
                record.session_kind.value,
                f"{record.attended}/{record.total}",
                str(record.computed_percentage),
                recommendation_text(recommendation),
            )
        console.print(table)


def render_recommendation(console: Console, recommendation: Recommendation) -> None:
    console.print(Panel(
        recommendation_text(recommendation),
        title=f"{recommendation.percentage}%",
        title_align="left",
        box=ROUNDED,
    ))


def render_profile(console: Console, profile: StudentProfile) -> None:
    table = Table(box=ROUNDED, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Roll no", profile.info.roll_no)
    table.add_row("Branch", profile.info.branch)
    table.add_row("Admission year", str(profile.info.admission_year))
    table.add_row("Current semester", str(profile.current_semester))
    table.add_row("Semesters shown", " / ".join(str(s) for s in profile.eligible_semesters))
    table.add_row("Academic year", profile.academic_year)
    console.print(table)
