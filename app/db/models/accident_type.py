"""
Accident type table.

Types are managed out-of-band (seeded by migration); the application only
reads them.
"""

from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String

from app.schemas.accident import AccidentType


class AccidentTypeRecord(SQLModel, table=True):
    """
    ORM Model for the accident_types table.
    """

    __tablename__ = "accident_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(
        sa_column=Column("type_name", String, nullable=False, unique=True),
        description="Human-readable type name, unique across types.",
    )

    def to_domain(self) -> AccidentType:
        """Convert to the domain object handed out by repositories."""
        return AccidentType(id=self.id, name=self.name)
