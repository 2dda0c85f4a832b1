"""
Service Dependencies (Dependency Injection for routes).
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.dependencies.database import get_db
from app.repositories import AccidentRepository, AccidentTypeRepository, RuleRepository
from app.services.accidents import AccidentService, AccidentTypeService, RuleService

SessionDep = Annotated[AsyncSession, Depends(get_db)]


def get_accident_service(session: SessionDep) -> AccidentService:
    return AccidentService(
        AccidentRepository(session), AccidentTypeRepository(session)
    )


def get_accident_type_service(session: SessionDep) -> AccidentTypeService:
    return AccidentTypeService(AccidentTypeRepository(session))


def get_rule_service(session: SessionDep) -> RuleService:
    return RuleService(RuleRepository(session))


AccidentServiceDep = Annotated[AccidentService, Depends(get_accident_service)]
AccidentTypeServiceDep = Annotated[AccidentTypeService, Depends(get_accident_type_service)]
RuleServiceDep = Annotated[RuleService, Depends(get_rule_service)]
