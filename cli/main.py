#!/usr/bin/env python3
"""
Stride CLI - Main Entry Point

Usage:
    stride report attendance.pdf --target 80
    stride recommend 30 40 --target 75 --kind Lab
    stride grade 90.99
    stride semester 24bce167@nirmauni.ac.in --on 2025-01-15
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from rich.console import Console

from stride.core.config import settings
from stride.core.exceptions import StrideError, UnreadableReportError
from stride.services import attendance_calculator as calculator
from stride.services import grade_calculator, report_extractor, student_resolver

from cli import renderer


NO_DATA_MESSAGE = "No attendance data found"


def _target(value: str) -> int:
    try:
        return calculator.validate_target(int(value))
    except (ValueError, StrideError):
        raise argparse.ArgumentTypeError("target must be an integer between 1 and 100")


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected a date as YYYY-MM-DD")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="stride",
        description="Stride - attendance, grades and semester lookups from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stride report attendance.pdf                 Advice for every subject in an MIS export
  stride report attendance.html --target 80    Same, against an 80% target
  stride recommend 30 40 --kind Lab            Advice for a single figure
  stride grade 90.99                           Letter grade for a weighted score
  stride semester 24bce167@nirmauni.ac.in      Branch and semester from an email
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    report_parser = subparsers.add_parser("report", help="Parse an MIS attendance report (PDF or HTML)")
    report_parser.add_argument("file", type=Path, help="Report file")
    report_parser.add_argument(
        "--target", "-t", type=_target, default=settings.DEFAULT_TARGET_PERCENTAGE,
        help="Target attendance percentage (default: %(default)s)",
    )

    recommend_parser = subparsers.add_parser("recommend", help="Advice for one attended/total figure")
    recommend_parser.add_argument("attended", type=int)
    recommend_parser.add_argument("total", type=int)
    recommend_parser.add_argument(
        "--target", "-t", type=_target, default=settings.DEFAULT_TARGET_PERCENTAGE,
    )
    recommend_parser.add_argument(
        "--kind", "-k", default=calculator.AttendanceKind.LECTURE.value,
        choices=[kind.value for kind in calculator.AttendanceKind],
    )

    grade_parser = subparsers.add_parser("grade", help="Letter grade for a weighted percentage")
    grade_parser.add_argument("percentage", type=float)

    semester_parser = subparsers.add_parser("semester", help="Resolve branch and semester from an email")
    semester_parser.add_argument("email")
    semester_parser.add_argument("--on", type=_day, default=None, help="Resolve as of YYYY-MM-DD")

    return parser


def run_report(console: Console, args) -> int:
    try:
        content = args.file.read_bytes()
    except OSError as e:
        console.print(f"[red]✗ Cannot read {args.file}: {e.strerror}[/red]")
        return 1

    try:
        records = report_extractor.parse_report(content, args.file.name)
    except UnreadableReportError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1

    if not records:
        console.print(f"[yellow]{NO_DATA_MESSAGE}[/yellow]")
        return 0

    results = calculator.recommend_records(records, args.target)
    renderer.render_report(console, calculator.group_by_outcome(results), args.target)
    return 0


def run_recommend(console: Console, args) -> int:
    if args.attended < 0 or args.total < 0:
        console.print("[red]✗ attended and total must not be negative[/red]")
        return 1
    recommendation = calculator.recommend(
        args.attended, args.total, args.target, calculator.AttendanceKind(args.kind)
    )
    renderer.render_recommendation(console, recommendation)
    return 0


def run_grade(console: Console, args) -> int:
    grade, points = grade_calculator.grade_for(args.percentage)
    console.print(f"[bold]{grade}[/bold] ({points} points)")
    return 0


def run_semester(console: Console, args) -> int:
    profile = student_resolver.resolve_student(args.email, args.on)
    if profile is None:
        console.print(f"[red]✗ {args.email} is not a recognised student email[/red]")
        return 1
    renderer.render_profile(console, profile)
    return 0


COMMANDS = {
    "report": run_report,
    "recommend": run_recommend,
    "grade": run_grade,
    "semester": run_semester,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    console = Console()
    return COMMANDS[args.command](console, args)


if __name__ == "__main__":
    sys.exit(main())
