"""
Accident repository.

Parameterized SQL over the accidents, accident_types, accidents_rules and
accident_rules tables. Reads run one three-way left join and hand the rows to
``aggregate_accidents``; writes keep the accidents_rules rows in step with
``Accident.rules``.

Every multi-statement write runs in a single transaction: it is committed
when all statements succeed and rolled back when any of them fails.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.logging import get_logger
from app.db.models import (
    AccidentRecord,
    AccidentRuleLink,
    AccidentTypeRecord,
    RuleRecord,
)
from app.repositories.aggregator import aggregate_accidents
from app.schemas.accident import Accident

logger = get_logger(__name__)


def _accident_rows_query():
    """accidents LEFT JOIN accident_types LEFT JOIN accidents_rules LEFT JOIN accident_rules."""
    return (
        select(
            AccidentRecord.id.label("accident_id"),
            AccidentRecord.name.label("accident_name"),
            AccidentRecord.text.label("accident_text"),
            AccidentRecord.address.label("accident_address"),
            AccidentTypeRecord.id.label("type_id"),
            AccidentTypeRecord.name.label("type_name"),
            RuleRecord.id.label("rule_id"),
            RuleRecord.name.label("rule_name"),
        )
        .select_from(AccidentRecord)
        .outerjoin(AccidentTypeRecord, AccidentRecord.type_id == AccidentTypeRecord.id)
        .outerjoin(AccidentRuleLink, AccidentRecord.id == AccidentRuleLink.accident_id)
        .outerjoin(RuleRecord, AccidentRuleLink.rule_id == RuleRecord.id)
        .order_by(AccidentRecord.id, RuleRecord.id)
    )


class AccidentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[None]:
        """Commit on success, roll back and re-raise on any failure."""
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error("Accident write rolled back", exc_info=True)
            raise

    async def save(self, accident: Accident) -> Optional[Accident]:
        """
        Insert an accident and its rule links.

        The generated id is written back onto ``accident``.

        Args:
            accident: Accident with ``id`` unset and ``type`` set. If the
                write fails, ``id`` is left as None.

        Returns:
            The same accident object, now carrying its id.

        Raises:
            ValueError: If the accident has no type.
        """
        if accident.type is None:
            raise ValueError("Cannot save an accident without a type")

        try:
            async with self._transaction():
                stmt = (
                    insert(AccidentRecord)
                    .values(
                        name=accident.name,
                        text=accident.text,
                        address=accident.address,
                        type_id=accident.type.id,
                    )
                    .returning(AccidentRecord.id)
                )
                res = await self.session.execute(stmt)
                accident.id = res.scalar_one()
                await self._insert_rule_links(accident)
        except Exception:
            # The id belonged to a rolled-back row.
            accident.id = None
            raise

        logger.info(
            "Saved accident %s with %d rule(s)", accident.id, len(accident.rules)
        )
        return accident

    async def find_by_id(self, accident_id: int) -> Optional[Accident]:
        """Return the accident with its type and rules, or None."""
        stmt = _accident_rows_query().where(AccidentRecord.id == accident_id)
        result = await self.session.execute(stmt)
        accidents = aggregate_accidents(result.mappings())
        return accidents.get(accident_id)

    async def update(self, accident: Accident) -> bool:
        """
        Overwrite an accident's columns and replace all of its rule links.

        Returns:
            False if no accident has ``accident.id`` (rule links untouched),
            True otherwise.
        """
        if accident.type is None:
            raise ValueError("Cannot update an accident without a type")

        async with self._transaction():
            stmt = (
                update(AccidentRecord)
                .where(AccidentRecord.id == accident.id)
                .values(
                    name=accident.name,
                    text=accident.text,
                    address=accident.address,
                    type_id=accident.type.id,
                )
                .execution_options(synchronize_session=False)
            )
            res = await self.session.execute(stmt)
            if res.rowcount == 0:
                logger.info("Accident %s not found, nothing updated", accident.id)
                return False

            await self._delete_rule_links(accident.id)
            await self._insert_rule_links(accident)

        logger.info(
            "Updated accident %s with %d rule(s)", accident.id, len(accident.rules)
        )
        return True

    async def delete_by_id(self, accident_id: int) -> bool:
        """
        Delete an accident, removing its rule links first.

        Returns:
            True if the accident row existed.
        """
        async with self._transaction():
            await self._delete_rule_links(accident_id)
            stmt = (
                delete(AccidentRecord)
                .where(AccidentRecord.id == accident_id)
                .execution_options(synchronize_session=False)
            )
            res = await self.session.execute(stmt)

        deleted = res.rowcount > 0
        if deleted:
            logger.info("Deleted accident %s", accident_id)
        return deleted

    async def find_all(self) -> List[Accident]:
        """Return every accident with its type and rules."""
        result = await self.session.execute(_accident_rows_query())
        accidents = aggregate_accidents(result.mappings())
        return list(accidents.values())

    async def _insert_rule_links(self, accident: Accident) -> None:
        links = [
            {"accident_id": accident.id, "rule_id": rule.id}
            for rule in sorted(accident.rules, key=lambda r: r.id)
        ]
        if links:
            await self.session.execute(insert(AccidentRuleLink), links)

    async def _delete_rule_links(self, accident_id: int) -> None:
        stmt = (
            delete(AccidentRuleLink)
            .where(AccidentRuleLink.accident_id == accident_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
