"""
Database Seed Data Module

Branches with eight semesters each, the first-year cycle subjects, a
sample second-year CSE semester and a handful of holidays.
Run with: python -m stride.db.seed_data [clear]
"""
import asyncio
from datetime import date
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from stride.core.database import init_db, session_scope
from stride.models.academic import Branch, Semester, Subject, EvaluationComponent
from stride.models.holiday import Holiday
from stride.models.resource import Contribution, Resource
from stride.services.student_resolver import BRANCH_MAPPING
from stride.services.subject_service import subject_service


SEMESTERS_PER_BRANCH = 8

STANDARD_COMPONENTS = [
    {"type": "CE", "weight": 20, "max_marks": 50},
    {"type": "LPW", "weight": 40, "max_marks": 50},
    {"type": "SEE", "weight": 40, "max_marks": 100},
]

THEORY_COMPONENTS = [
    {"type": "CE", "weight": 40, "max_marks": 50},
    {"type": "SEE", "weight": 60, "max_marks": 100},
]

FIRST_YEAR_SUBJECTS = {
    1: [
        {"code": "2MA101", "name": "Mathematics - I", "credits": 4},
        {"code": "2CP101", "name": "Computer Programming", "credits": 4},
        {"code": "2PY101", "name": "Physics", "credits": 4},
        {"code": "2EE101", "name": "Elements of Electrical Science", "credits": 4},
        {"code": "2CH102", "name": "Environmental Science", "credits": 2},
        {"code": "2EN101", "name": "General English", "credits": 2},
        {"code": "2CH101", "name": "Chemistry", "credits": 4},
        {"code": "2CS101", "name": "Introduction to Web Programming", "credits": 4},
        {"code": "2MA102", "name": "Statistics", "credits": 2},
        {"code": "2EN102", "name": "Written Communication", "credits": 2},
        {"code": "2HU101", "name": "Contemporary India", "credits": 2},
        {"code": "2ME101", "name": "Engineering Drawing & Workshop", "credits": 4},
    ],
    2: [
        {"code": "2MA201", "name": "Mathematics - II", "credits": 4},
        {"code": "2AI201", "name": "Artificial Intelligence & Machine Learning", "credits": 4},
        {"code": "2PY101", "name": "Physics", "credits": 4},
        {"code": "2EE101", "name": "Elements of Electrical Science", "credits": 4},
        {"code": "2CH102", "name": "Environmental Science", "credits": 2},
        {"code": "2EN101", "name": "General English", "credits": 2},
        {"code": "2CH101", "name": "Chemistry", "credits": 4},
        {"code": "2CS101", "name": "Introduction to Web Programming", "credits": 4},
        {"code": "2MA102", "name": "Statistics", "credits": 2},
        {"code": "2EN102", "name": "Written Communication", "credits": 2},
        {"code": "2HU101", "name": "Contemporary India", "credits": 2},
        {"code": "2ME101", "name": "Engineering Drawing & Workshop", "credits": 4},
    ],
}

CSE_SEMESTER_4 = [
    {"code": "2CS401", "name": "Database Management Systems", "credits": 4},
    {"code": "2CS402", "name": "Operating Systems", "credits": 4},
]

SAMPLE_HOLIDAYS = [
    {"name": "Republic Day", "date": date(2026, 1, 26)},
    {"name": "Holi", "date": date(2026, 3, 4)},
    {"name": "Independence Day", "date": date(2026, 8, 15)},
    {"name": "Gandhi Jayanti", "date": date(2026, 10, 2)},
    {"name": "Diwali", "date": date(2026, 11, 8)},
]


def branch_names() -> List[str]:
    """Distinct branch names, in mapping order"""
    return list(dict.fromkeys(BRANCH_MAPPING.values()))


async def seed_branches(db: AsyncSession) -> List[Semester]:
    semesters = []
    for name in branch_names():
        for number in range(1, SEMESTERS_PER_BRANCH + 1):
            semesters.append(await subject_service.get_or_create_semester(db, name, number))
    print(f"  ✓ {len(branch_names())} branches, {len(semesters)} semesters")
    return semesters


async def _add_subjects(db: AsyncSession, semester: Semester, subjects: List[dict], components: List[dict]) -> int:
    result = await db.execute(select(Subject.code).where(Subject.semester_id == semester.id))
    existing = set(result.scalars().all())

    added = 0
    for data in subjects:
        if data["code"] in existing:
            continue
        db.add(Subject(
            semester_id=semester.id,
            code=data["code"],
            name=data["name"],
            credits=data["credits"],
            attendance_threshold=75,
            components=[
                EvaluationComponent(position=position, **component)
                for position, component in enumerate(components)
            ],
        ))
        added += 1
    return added


async def seed_subjects(db: AsyncSession) -> int:
    added = 0
    for name in branch_names():
        for number, subjects in FIRST_YEAR_SUBJECTS.items():
            semester = await subject_service.get_semester(db, name, number)
            added += await _add_subjects(db, semester, subjects, THEORY_COMPONENTS)

    cse = await subject_service.get_semester(db, BRANCH_MAPPING["BCE"], 4)
    added += await _add_subjects(db, cse, CSE_SEMESTER_4, STANDARD_COMPONENTS)

    await db.flush()
    print(f"  ✓ {added} subjects")
    return added


async def seed_holidays(db: AsyncSession) -> int:
    result = await db.execute(select(Holiday.date))
    existing = set(result.scalars().all())

    added = 0
    for data in SAMPLE_HOLIDAYS:
        if data["date"] not in existing:
            db.add(Holiday(**data))
            added += 1
    print(f"  ✓ {added} holidays")
    return added


async def seed_all():
    """Seed all sample data"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    try:
        async with session_scope() as db:
            await seed_branches(db)
            await seed_subjects(db)
            await seed_holidays(db)
    except Exception as e:
        print(f"Error seeding database: {e}")
        raise

    print("=" * 50)
    print("Database seeding completed successfully!")
    print("=" * 50)


async def clear_all():
    """Clear all data from database"""
    print("Clearing all data...")
    async with session_scope() as db:
        # Delete in reverse order of dependencies
        await db.execute(delete(Contribution))
        await db.execute(delete(Resource))
        await db.execute(delete(EvaluationComponent))
        await db.execute(delete(Subject))
        await db.execute(delete(Semester))
        await db.execute(delete(Branch))
        await db.execute(delete(Holiday))
    print("All data cleared!")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())
