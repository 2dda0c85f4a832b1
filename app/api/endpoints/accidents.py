from typing import List

from fastapi import APIRouter, HTTPException, status

from app.dependencies.services import (
    AccidentServiceDep,
    AccidentTypeServiceDep,
    RuleServiceDep,
)
from app.schemas.accident import Accident, AccidentType, Rule

router = APIRouter()


@router.get("/accidents", response_model=List[Accident])
async def list_accidents(service: AccidentServiceDep):
    """List all accidents with their types and rules."""
    return await service.find_all()


@router.get("/accidents/{accident_id}", response_model=Accident)
async def get_accident(accident_id: int, service: AccidentServiceDep):
    """
    Get a single accident.

    Raises:
        HTTPException: 404 if the accident does not exist.
    """
    accident = await service.find_by_id(accident_id)
    if accident is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Accident {accident_id} not found",
        )
    return accident


@router.get("/accident-types", response_model=List[AccidentType])
async def list_accident_types(service: AccidentTypeServiceDep):
    return await service.find_all()


@router.get("/rules", response_model=List[Rule])
async def list_rules(service: RuleServiceDep):
    return await service.find_all()
