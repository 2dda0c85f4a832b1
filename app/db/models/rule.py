"""
Rule (violated article) table. Reference data, read-only.
"""

from typing import Optional

from sqlmodel import SQLModel, Field

from app.schemas.accident import Rule


class RuleRecord(SQLModel, table=True):
    """
    ORM Model for the accident_rules table.
    """

    __tablename__ = "accident_rules"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, description="Article text or number.")

    def to_domain(self) -> Rule:
        """Convert to the domain object handed out by repositories."""
        return Rule(id=self.id, name=self.name)
