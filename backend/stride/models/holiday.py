from sqlalchemy import Column, String, Date, DateTime, Boolean
from datetime import datetime

from stride.core.database import Base
from stride.core.types import id_column


class Holiday(Base):
    """Institute holiday"""
    __tablename__ = "holidays"

    id = id_column()

    name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)

    # Floating holidays are optional, students pick one from a list
    is_floating = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Holiday {self.name} {self.date}>"
