"""
Unit Tests for seed data
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stride.db.seed_data import (
    SAMPLE_HOLIDAYS,
    branch_names,
    seed_branches,
    seed_holidays,
    seed_subjects,
)
from stride.models.academic import Branch, Subject
from stride.services.subject_service import subject_service


class TestSeedData:
    """Test idempotent seeding"""

    def test_branch_names_are_distinct(self):
        names = branch_names()
        assert len(names) == len(set(names))
        assert "Computer Science Engineering" in names

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session: AsyncSession):
        semesters = await seed_branches(db_session)
        assert len(semesters) == len(branch_names()) * 8

        first = await seed_subjects(db_session)
        assert first > 0
        assert await seed_subjects(db_session) == 0

        assert await seed_holidays(db_session) == len(SAMPLE_HOLIDAYS)
        assert await seed_holidays(db_session) == 0

        branches = await db_session.scalar(select(func.count()).select_from(Branch))
        assert branches == len(branch_names())

    @pytest.mark.asyncio
    async def test_seeded_cycle_split(self, db_session: AsyncSession):
        await seed_branches(db_session)
        await seed_subjects(db_session)

        cycle_a = await subject_service.list_subjects(
            db_session, branch="Civil Engineering", semester=1, cycle="A"
        )
        names = [s["name"] for s in cycle_a]

        assert "Physics" in names
        assert "Chemistry" not in names
        assert "Computer Programming" in names

        count = await db_session.scalar(
            select(func.count()).select_from(Subject).where(Subject.code == "2CS401")
        )
        assert count == 1
