"""
Row aggregation for the accident join query.

The accident queries return one flat row per (accident, rule) pairing:

    accident_id | accident_name | accident_text | accident_address
    type_id | type_name | rule_id | rule_name

An accident without rules still produces exactly one row, with the rule
columns set to NULL by the left join. ``aggregate_accidents`` folds such rows
back into one ``Accident`` per id, collecting the distinct rules.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, MutableMapping, Optional

from app.schemas.accident import Accident, AccidentType, Rule

AccidentRow = Mapping[str, Any]


@dataclass
class _AccidentBuilder:
    """Mutable accumulator for one accident while rows are folded."""

    id: int
    name: str
    text: str
    address: str
    type: Optional[AccidentType]
    rules: Dict[int, Rule] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: AccidentRow) -> "_AccidentBuilder":
        accident_type = None
        if row["type_id"] is not None:
            accident_type = AccidentType(id=row["type_id"], name=row["type_name"])
        return cls(
            id=row["accident_id"],
            name=row["accident_name"],
            text=row["accident_text"] or "",
            address=row["accident_address"] or "",
            type=accident_type,
        )

    @classmethod
    def from_accident(cls, accident: Accident) -> "_AccidentBuilder":
        return cls(
            id=accident.id,
            name=accident.name,
            text=accident.text,
            address=accident.address,
            type=accident.type,
            rules={rule.id: rule for rule in accident.rules},
        )

    def add_rule(self, row: AccidentRow) -> None:
        rule_id = row["rule_id"]
        if rule_id is None or rule_id in self.rules:
            return
        self.rules[rule_id] = Rule(id=rule_id, name=row["rule_name"])

    def build(self) -> Accident:
        return Accident(
            id=self.id,
            name=self.name,
            text=self.text,
            address=self.address,
            type=self.type,
            rules=set(self.rules.values()),
        )


def aggregate_accidents(
    rows: Iterable[AccidentRow],
    accidents: Optional[MutableMapping[int, Accident]] = None,
) -> MutableMapping[int, Accident]:
    """
    Fold flat join rows into accidents keyed by id.

    Args:
        rows: Row mappings carrying the labelled accident/type/rule columns.
        accidents: Mapping to fold into. Accidents already present are
            extended with the rules found in ``rows``. A new dict is used
            when omitted.

    Returns:
        The mapping of accident id to ``Accident``, in order of first
        appearance.
    """
    if accidents is None:
        accidents = {}

    builders: Dict[int, _AccidentBuilder] = {}
    for row in rows:
        accident_id = row["accident_id"]
        builder = builders.get(accident_id)
        if builder is None:
            existing = accidents.get(accident_id)
            if existing is not None:
                builder = _AccidentBuilder.from_accident(existing)
            else:
                builder = _AccidentBuilder.from_row(row)
            builders[accident_id] = builder
        builder.add_rule(row)

    for accident_id, builder in builders.items():
        accidents[accident_id] = builder.build()
    return accidents
