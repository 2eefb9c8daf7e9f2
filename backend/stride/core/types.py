"""Column helpers shared by the Stride models"""
import uuid

from sqlalchemy import Column, ForeignKey, String

# Ids are UUID4 strings so SQLite and PostgreSQL store them the same way
ID_LENGTH = 36


def new_id() -> str:
    return str(uuid.uuid4())


def id_column() -> Column:
    return Column(String(ID_LENGTH), primary_key=True, default=new_id)


def parent_id_column(target: str, nullable: bool = False) -> Column:
    """Foreign key to a parent row; the child is removed with its parent"""
    return Column(String(ID_LENGTH), ForeignKey(target, ondelete="CASCADE"), nullable=nullable, index=True)
