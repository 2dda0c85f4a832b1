"""
Accident services.

Thin orchestration over the repositories. ``AccidentService.create`` is the
only operation with logic of its own: it resolves the accident type before
anything is written.
"""

from typing import Iterable, List, Optional, Set

from app.core.logging import get_logger
from app.repositories import AccidentRepository, AccidentTypeRepository, RuleRepository
from app.schemas.accident import Accident, AccidentType, Rule

logger = get_logger(__name__)


class AccidentTypeNotFoundError(LookupError):
    """Raised when an accident refers to a type id that does not exist."""

    def __init__(self, type_id: int):
        super().__init__(f"Accident type {type_id} not found")
        self.type_id = type_id


class AccidentService:
    def __init__(
        self,
        accidents: AccidentRepository,
        accident_types: AccidentTypeRepository,
    ):
        self.accidents = accidents
        self.accident_types = accident_types

    async def find_all(self) -> List[Accident]:
        return await self.accidents.find_all()

    async def create(self, accident: Accident, type_id: int) -> Accident:
        """
        Resolve the accident type, then persist the accident.

        Args:
            accident: New accident (``id`` unset); its rules are saved as-is.
            type_id: Id of an existing accident type.

        Returns:
            The saved accident with its generated id.

        Raises:
            AccidentTypeNotFoundError: If ``type_id`` does not exist. Nothing
                is written in that case.
        """
        accident.type = await self.find_type(type_id)
        return await self.accidents.save(accident)

    async def find_by_id(self, accident_id: int) -> Optional[Accident]:
        return await self.accidents.find_by_id(accident_id)

    async def update(self, accident: Accident) -> bool:
        return await self.accidents.update(accident)

    async def delete_by_id(self, accident_id: int) -> bool:
        return await self.accidents.delete_by_id(accident_id)

    async def find_type(self, type_id: int) -> AccidentType:
        """Resolve a type id, raising ``AccidentTypeNotFoundError`` if absent."""
        accident_type = await self.accident_types.find_by_id(type_id)
        if accident_type is None:
            logger.warning("Unknown accident type requested: %s", type_id)
            raise AccidentTypeNotFoundError(type_id)
        return accident_type


class AccidentTypeService:
    def __init__(self, accident_types: AccidentTypeRepository):
        self.accident_types = accident_types

    async def find_all(self) -> List[AccidentType]:
        return await self.accident_types.find_all()


class RuleService:
    def __init__(self, rules: RuleRepository):
        self.rules = rules

    async def find_all(self) -> List[Rule]:
        return await self.rules.find_all()

    async def find_by_ids(self, rule_ids: Iterable[int]) -> Set[Rule]:
        return await self.rules.find_by_ids(rule_ids)
