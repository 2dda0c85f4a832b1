"""
Read-only access to rules (violated articles).
"""

from typing import Iterable, List, Set

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.models import RuleRecord
from app.schemas.accident import Rule


class RuleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[Rule]:
        statement = select(RuleRecord).order_by(RuleRecord.id)
        result = await self.session.execute(statement)
        return [record.to_domain() for record in result.scalars().all()]

    async def find_by_ids(self, rule_ids: Iterable[int]) -> Set[Rule]:
        """Resolve rule ids to rules. Unknown ids are skipped."""
        ids = set(rule_ids)
        if not ids:
            return set()
        statement = select(RuleRecord).where(RuleRecord.id.in_(ids))
        result = await self.session.execute(statement)
        return {record.to_domain() for record in result.scalars().all()}
