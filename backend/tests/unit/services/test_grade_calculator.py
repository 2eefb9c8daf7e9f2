"""
Unit Tests for the Grade Calculator
Tests for: grade boundaries, weighted subject scores, SGPA and CGPA
"""
import pytest

from stride.core.exceptions import InvalidMarksError
from stride.services.grade_calculator import (
    GRADE_POINTS,
    EvaluationComponent,
    GradedSubject,
    calculate_cgpa,
    calculate_sgpa,
    grade_for,
    subject_score,
)


class TestGradeFor:
    """Test percentage to grade mapping"""

    @pytest.mark.parametrize("percentage,expected", [
        (100, ("O", 10)),
        (91, ("O", 10)),
        (90.99, ("A+", 9)),
        (81, ("A+", 9)),
        (71, ("A", 8)),
        (61, ("B+", 7)),
        (51, ("B", 6)),
        (46, ("C", 5)),
        (45.5, ("P", 4)),
        (40, ("P", 4)),
        (39.99, ("F", 0)),
        (0, ("F", 0)),
    ])
    def test_boundaries(self, percentage, expected):
        assert grade_for(percentage) == expected

    def test_points_lookup(self):
        assert GRADE_POINTS["O"] == 10
        assert GRADE_POINTS["F"] == 0
        assert GRADE_POINTS["Ab"] == 0


@pytest.fixture
def dbms():
    return GradedSubject(
        code="2CS401",
        name="Database Management Systems",
        credits=4,
        components=[
            EvaluationComponent("CE", 20, 50),
            EvaluationComponent("LPW", 40, 50),
            EvaluationComponent("SEE", 40, 100),
        ],
    )


@pytest.fixture
def operating_systems():
    return GradedSubject(
        code="2CS402",
        name="Operating Systems",
        credits=4,
        components=[
            EvaluationComponent("CE", 40, 50),
            EvaluationComponent("SEE", 60, 100),
        ],
    )


class TestSubjectScore:
    """Test weighted component aggregation"""

    def test_weighted_sum(self, dbms):
        assert subject_score(dbms.components, {0: 45, 1: 40, 2: 80}) == pytest.approx(82.0)

    def test_missing_marks_count_as_zero(self, dbms):
        assert subject_score(dbms.components, {2: 100}) == pytest.approx(40.0)
        assert subject_score(dbms.components) == 0

    def test_marks_above_maximum(self, dbms):
        with pytest.raises(InvalidMarksError) as exc_info:
            subject_score(dbms.components, {0: 51})
        assert exc_info.value.details["component"] == "CE"

    def test_negative_marks(self, dbms):
        with pytest.raises(InvalidMarksError):
            subject_score(dbms.components, {2: -1})

    def test_zero_max_component_ignored(self):
        components = [EvaluationComponent("Viva", 10, 0), EvaluationComponent("SEE", 90, 100)]
        assert subject_score(components, {0: 0, 1: 50}) == pytest.approx(45.0)


class TestSgpa:
    """Test semester aggregation"""

    def test_credit_weighted(self, dbms, operating_systems):
        result = calculate_sgpa(
            [dbms, operating_systems],
            {"2CS401": {0: 45, 1: 40, 2: 80}, "2CS402": {0: 50, 1: 90}},
        )

        assert result.sgpa == 9.5
        assert result.total_credits == 8
        assert [(s.code, s.grade, s.points) for s in result.subjects] == [
            ("2CS401", "A+", 9),
            ("2CS402", "O", 10),
        ]

    def test_zero_credit_subject_excluded(self, dbms):
        seminar = GradedSubject(code="2HS401", name="Seminar", credits=0)
        result = calculate_sgpa([dbms, seminar], {"2CS401": {0: 50, 1: 50, 2: 100}})

        assert result.sgpa == 10.0
        assert result.total_credits == 4
        assert result.subjects[1].grade == "F"

    def test_no_credits(self):
        result = calculate_sgpa([])
        assert result.sgpa == 0.0
        assert result.total_credits == 0
        assert result.subjects == []


class TestCgpa:
    """Test cumulative aggregation"""

    def test_credit_weighted(self):
        assert calculate_cgpa([(9.5, 8), (8.0, 22)]) == 8.4

    def test_zero_credit_semesters_skipped(self):
        assert calculate_cgpa([(9.0, 20), (4.0, 0)]) == 9.0

    def test_empty(self):
        assert calculate_cgpa([]) == 0.0
