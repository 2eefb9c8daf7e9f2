"""
Shared study material

Resources are the published notes and previous-year papers listed per
subject. Contributions are student submissions waiting for the admin;
approving one publishes it as a Resource, rejecting one deletes it.
"""
from sqlalchemy import Column, String, DateTime, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from stride.core.database import Base
from stride.core.types import id_column, parent_id_column


class ResourceType(str, Enum):
    NOTES = "NOTES"
    PYQ = "PYQ"  # previous year question paper


class ContributionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Resource(Base):
    """Published study material for a subject"""
    __tablename__ = "resources"

    id = id_column()
    subject_id = parent_id_column("subjects.id")

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(SQLEnum(ResourceType, values_callable=lambda obj: [e.value for e in obj]), nullable=False, index=True)
    url = Column(Text, nullable=False)
    author = Column(String(255), default="Admin", nullable=False)

    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    subject = relationship("Subject", lazy="selectin")

    def __repr__(self):
        return f"<Resource {self.type} {self.title}>"


class Contribution(Base):
    """Student submission awaiting moderation"""
    __tablename__ = "contributions"

    id = id_column()
    subject_id = parent_id_column("subjects.id")

    type = Column(SQLEnum(ResourceType, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    status = Column(
        SQLEnum(ContributionStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=ContributionStatus.PENDING,
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(Text, nullable=False)

    submitted_by = Column(String(255), nullable=False)
    reviewed_by = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    reviewed_at = Column(DateTime, nullable=True)

    subject = relationship("Subject", lazy="selectin")

    def __repr__(self):
        return f"<Contribution {self.type} {self.title} ({self.status})>"
