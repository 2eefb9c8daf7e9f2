"""
Academic catalogue models
Branch -> Semester -> Subject -> EvaluationComponent
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from stride.core.database import Base
from stride.core.types import id_column, parent_id_column


def slugify(name: str) -> str:
    """'Electronics & Communication' -> 'electronics-communication'"""
    slug = "".join(ch if ch.isalnum() else "-" for ch in name.lower())
    return "-".join(part for part in slug.split("-") if part)


class Branch(Base):
    """Engineering branch (programme)"""
    __tablename__ = "branches"

    id = id_column()
    name = Column(String(255), unique=True, nullable=False, index=True)
    slug = Column(String(255), unique=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    semesters = relationship(
        "Semester",
        back_populates="branch",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Branch {self.name}>"


class Semester(Base):
    """One semester of a branch, optionally with its academic calendar"""
    __tablename__ = "semesters"
    __table_args__ = (
        UniqueConstraint("branch_id", "number", name="uq_semester_branch_number"),
    )

    id = id_column()
    branch_id = parent_id_column("branches.id")
    number = Column(Integer, nullable=False)

    # Link to the published academic calendar (PDF / Drive file)
    academic_calendar_url = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    branch = relationship("Branch", back_populates="semesters", lazy="selectin")
    subjects = relationship(
        "Subject",
        back_populates="semester",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Semester {self.number} of {self.branch_id}>"


class Subject(Base):
    """Subject taught in a semester"""
    __tablename__ = "subjects"

    id = id_column()
    semester_id = parent_id_column("semesters.id")

    code = Column(String(20), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    credits = Column(Integer, default=0, nullable=False)
    attendance_threshold = Column(Integer, default=75, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    semester = relationship("Semester", back_populates="subjects", lazy="selectin")
    components = relationship(
        "EvaluationComponent",
        back_populates="subject",
        cascade="all, delete-orphan",
        order_by="EvaluationComponent.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Subject {self.code} {self.name}>"


class EvaluationComponent(Base):
    """Weighted assessment of a subject (mid-sem, lab eval, ...)"""
    __tablename__ = "evaluation_components"

    id = id_column()
    subject_id = parent_id_column("subjects.id")

    type = Column(String(100), nullable=False)
    weight = Column(Float, nullable=False)  # percentage of the final score
    max_marks = Column(Float, nullable=False)
    position = Column(Integer, default=0, nullable=False)

    subject = relationship("Subject", back_populates="components")

    def __repr__(self):
        return f"<EvaluationComponent {self.type} {self.weight}%>"
