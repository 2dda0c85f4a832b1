"""
Accident tables.

- AccidentRecord: one row per accident, pointing at its type
- AccidentRuleLink: accidents <-> rules association (accidents_rules)

No ORM relationships are declared. The accident repository reads
these tables with an explicit three-way left join and folds the rows itself.
"""

from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text


class AccidentRecord(SQLModel, table=True):
    """
    ORM Model for the accidents table.
    """

    __tablename__ = "accidents"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, description="Short title of the accident.")
    text: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Free-form description.",
    )
    address: str = Field(default="", nullable=False, description="Where it happened.")
    type_id: int = Field(
        foreign_key="accident_types.id",
        nullable=False,
        index=True,
        description="The accident type.",
    )


class AccidentRuleLink(SQLModel, table=True):
    """
    Join table between accidents and the rules they violate.
    """

    __tablename__ = "accidents_rules"

    accident_id: int = Field(foreign_key="accidents.id", primary_key=True)
    rule_id: int = Field(foreign_key="accident_rules.id", primary_key=True)
