"""
Subject Service - subject catalogue and first-year cycle filtering

Handles:
- Find-or-create of branches and semesters
- Subject CRUD with evaluation components
- Cycle A / Cycle B filtering for semesters 1 and 2
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select
from typing import Optional, List, Iterable

from stride.core.exceptions import SubjectNotFoundError, ValidationError
from stride.core.logging_config import logger
from stride.models.academic import Branch, Semester, Subject, EvaluationComponent, slugify
from stride.models.resource import Contribution, Resource
from stride.schemas.subject import SubjectCreate, SubjectUpdate, ComponentSchema
from stride.services.cache_service import cache_service
from stride.services import grade_calculator


CYCLE_A_SUBJECTS = [
    "Physics",
    "Elements of Electrical Science",
    "Environmental Science",
    "General English",
]

CYCLE_B_SUBJECTS = [
    "Chemistry",
    "Introduction to Web Programming",
    "Statistics",
    "Written Communication",
    "Contemporary India",
    "Engineering Drawing",
]

COMMON_SUBJECTS = [
    "Mathematics",
    "Computer Programming",
    "Artificial Intelligence",
]

FIRST_YEAR_SEMESTERS = (1, 2)


def _matches_any(name: str, entries: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(entry.lower() in lowered for entry in entries)


def is_visible_in_cycle(name: str, semester: int, cycle: Optional[str]) -> bool:
    """
    Whether a subject is shown to a first-year student of the given cycle.

    Common and unlisted subjects are always shown, as is everything outside
    semesters 1 and 2 or without a cycle.
    """
    if semester not in FIRST_YEAR_SEMESTERS or not cycle:
        return True
    if _matches_any(name, COMMON_SUBJECTS):
        return True

    cycle = cycle.upper()
    if cycle == "A":
        return not _matches_any(name, CYCLE_B_SUBJECTS)
    if cycle == "B":
        return not _matches_any(name, CYCLE_A_SUBJECTS)
    return True


def subject_to_dict(subject: Subject) -> dict:
    return {
        "id": subject.id,
        "code": subject.code,
        "name": subject.name,
        "credits": subject.credits,
        "attendance_threshold": subject.attendance_threshold,
        "branch": subject.semester.branch.name,
        "semester": subject.semester.number,
        "components": [
            {"type": c.type, "weight": c.weight, "max_marks": c.max_marks}
            for c in subject.components
        ],
    }


def _build_components(components: List[ComponentSchema]) -> List[EvaluationComponent]:
    return [
        EvaluationComponent(
            type=component.type,
            weight=component.weight,
            max_marks=component.max_marks,
            position=position,
        )
        for position, component in enumerate(components)
    ]


class SubjectService:
    """Service for the branch / semester / subject catalogue"""

    # ==================== BRANCH & SEMESTER ====================

    async def get_branch(self, db: AsyncSession, name: str) -> Optional[Branch]:
        result = await db.execute(select(Branch).where(Branch.name == name))
        return result.scalar_one_or_none()

    async def get_or_create_branch(self, db: AsyncSession, name: str) -> Branch:
        branch = await self.get_branch(db, name)
        if branch is None:
            branch = Branch(name=name, slug=slugify(name))
            db.add(branch)
            await db.flush()
            logger.info(f"Created branch: {name}")
        return branch

    async def get_semester(self, db: AsyncSession, branch_name: str, number: int) -> Optional[Semester]:
        result = await db.execute(
            select(Semester)
            .join(Branch, Semester.branch_id == Branch.id)
            .where(Branch.name == branch_name, Semester.number == number)
        )
        return result.scalar_one_or_none()

    async def get_or_create_semester(self, db: AsyncSession, branch_name: str, number: int) -> Semester:
        semester = await self.get_semester(db, branch_name, number)
        if semester is None:
            branch = await self.get_or_create_branch(db, branch_name)
            semester = Semester(branch=branch, number=number)
            db.add(semester)
            await db.flush()
            logger.info(f"Created semester {number} for {branch_name}")
        return semester

    # ==================== SUBJECT QUERIES ====================

    async def list_subjects(
        self,
        db: AsyncSession,
        branch: Optional[str] = None,
        semester: Optional[int] = None,
        cycle: Optional[str] = None,
    ) -> List[dict]:
        """Subjects with components, filtered by branch, semester and cycle"""
        cached = await cache_service.get_subjects(branch, semester, cycle)
        if cached is not None:
            return cached

        query = (
            select(Subject)
            .join(Semester, Subject.semester_id == Semester.id)
            .join(Branch, Semester.branch_id == Branch.id)
            .order_by(Subject.name)
        )
        if branch:
            query = query.where(Branch.name == branch)
        if semester:
            query = query.where(Semester.number == semester)

        result = await db.execute(query)
        subjects = [
            subject_to_dict(subject)
            for subject in result.scalars().all()
            if is_visible_in_cycle(subject.name, subject.semester.number, cycle)
        ]

        await cache_service.set_subjects(branch, semester, cycle, subjects)
        return subjects

    async def get_subject(self, db: AsyncSession, subject_id: str) -> Subject:
        result = await db.execute(select(Subject).where(Subject.id == subject_id))
        subject = result.scalar_one_or_none()
        if subject is None:
            raise SubjectNotFoundError(subject_id)
        return subject

    async def get_graded_subjects(
        self,
        db: AsyncSession,
        branch: str,
        semester: int,
    ) -> List[grade_calculator.GradedSubject]:
        """Subjects of one semester in the shape the grade calculator expects"""
        result = await db.execute(
            select(Subject)
            .join(Semester, Subject.semester_id == Semester.id)
            .join(Branch, Semester.branch_id == Branch.id)
            .where(Branch.name == branch, Semester.number == semester)
            .order_by(Subject.name)
        )

        return [
            grade_calculator.GradedSubject(
                code=subject.code,
                name=subject.name,
                credits=subject.credits,
                components=[
                    grade_calculator.EvaluationComponent(c.type, c.weight, c.max_marks)
                    for c in subject.components
                ],
            )
            for subject in result.scalars().all()
        ]

    # ==================== SUBJECT CRUD ====================

    async def create_subject(self, db: AsyncSession, data: SubjectCreate) -> Subject:
        semester = await self.get_or_create_semester(db, data.branch, data.semester)

        existing = await db.execute(
            select(Subject).where(Subject.semester_id == semester.id, Subject.code == data.code)
        )
        if existing.scalar_one_or_none():
            raise ValidationError(
                f"Subject {data.code} already exists in {data.branch} semester {data.semester}",
                field="code",
            )

        subject = Subject(
            code=data.code,
            name=data.name,
            credits=data.credits,
            attendance_threshold=data.attendance_threshold,
            semester=semester,
            components=_build_components(data.components),
        )
        db.add(subject)
        await db.flush()

        await cache_service.invalidate_subjects()
        logger.info(f"Created subject {subject.code} in {data.branch} semester {data.semester}")
        return subject

    async def update_subject(self, db: AsyncSession, subject_id: str, data: SubjectUpdate) -> Subject:
        subject = await self.get_subject(db, subject_id)
        updates = data.model_dump(exclude_unset=True, exclude={"components"})

        for field, value in updates.items():
            if value is not None:
                setattr(subject, field, value)

        if data.components is not None:
            subject.components = _build_components(data.components)

        await db.flush()
        await cache_service.invalidate_subjects()
        logger.info(f"Updated subject {subject.code}")
        return subject

    async def delete_subject(self, db: AsyncSession, subject_id: str) -> None:
        subject = await self.get_subject(db, subject_id)
        # Shared material goes with its subject
        await db.execute(delete(Contribution).where(Contribution.subject_id == subject.id))
        await db.execute(delete(Resource).where(Resource.subject_id == subject.id))
        await db.delete(subject)
        await db.flush()
        await cache_service.invalidate_subjects()
        logger.info(f"Deleted subject {subject.code}")


subject_service = SubjectService()
