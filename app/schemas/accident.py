"""
Accident domain objects.

These are the shapes the repositories hand out and the services pass around.
They are not tables: the row-level models live in ``app.db.models`` and the
repositories assemble these objects from join results.

- AccidentType: classification of an accident (identity by id)
- Rule: a violated rule/article (identity by id)
- Accident: an incident with one type and a set of rules
"""

from typing import Optional, Set

from sqlmodel import SQLModel, Field


class AccidentType(SQLModel):
    """Accident classification. Two types are equal when their ids are."""

    id: int
    name: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccidentType):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Rule(SQLModel):
    """Reference rule/article. Shared between accidents, equal by id."""

    id: int
    name: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Accident(SQLModel):
    """
    A logged traffic accident.

    ``id`` stays ``None`` until the repository saves the accident. ``type`` is
    required for persistence but may be ``None`` on an accident read back
    through a left join whose type row is missing.
    """

    id: Optional[int] = None
    name: str
    text: str = ""
    address: str = ""
    type: Optional[AccidentType] = None
    rules: Set[Rule] = Field(default_factory=set)
