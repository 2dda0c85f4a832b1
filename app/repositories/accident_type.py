"""
Read-only access to accident types.
"""

from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.models import AccidentTypeRecord
from app.schemas.accident import AccidentType


class AccidentTypeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[AccidentType]:
        """Fetch every accident type, ordered by id."""
        statement = select(AccidentTypeRecord).order_by(AccidentTypeRecord.id)
        result = await self.session.execute(statement)
        return [record.to_domain() for record in result.scalars().all()]

    async def find_by_id(self, type_id: int) -> Optional[AccidentType]:
        """Fetch one accident type, or None if it does not exist."""
        record = await self.session.get(AccidentTypeRecord, type_id)
        return record.to_domain() if record else None
