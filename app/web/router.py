"""
Web Router - Template responses

All routes that return HTML pages for accidents live here.
This keeps the API layer clean for pure JSON endpoints.
"""

from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.auth import SESSION_USER_KEY
from app.dependencies.services import (
    AccidentServiceDep,
    AccidentTypeServiceDep,
    RuleServiceDep,
)
from app.schemas.accident import Accident
from app.services.accidents import (
    AccidentTypeNotFoundError,
    AccidentTypeService,
    RuleService,
)

router = APIRouter()
templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")


async def _render_form(
    request: Request,
    types: AccidentTypeService,
    rules: RuleService,
    accident: Accident,
    action: str,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
):
    context = {
        "accident": accident,
        "action": action,
        "types": await types.find_all(),
        "rules": await rules.find_all(),
        "selected_rule_ids": {rule.id for rule in accident.rules},
        "error": error,
        "username": request.session.get(SESSION_USER_KEY),
    }
    return templates.TemplateResponse(
        request, "accidents/form.html", context, status_code=status_code
    )


def _not_found(request: Request, accident_id: int):
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "message": f"Accident {accident_id} not found",
            "username": request.session.get(SESSION_USER_KEY),
        },
        status_code=status.HTTP_404_NOT_FOUND,
    )


# -----------------------------------------------------------------------------
# Page Routes
# -----------------------------------------------------------------------------


@router.get("/")
async def index(request: Request, service: AccidentServiceDep):
    accidents = await service.find_all()
    return templates.TemplateResponse(
        request,
        "accidents/index.html",
        {"accidents": accidents, "username": request.session.get(SESSION_USER_KEY)},
    )


@router.get("/accidents/create")
async def create_form(
    request: Request, types: AccidentTypeServiceDep, rules: RuleServiceDep
):
    return await _render_form(
        request, types, rules, Accident(name=""), action="/accidents/save"
    )


@router.post("/accidents/save")
async def save_accident(
    request: Request,
    service: AccidentServiceDep,
    types: AccidentTypeServiceDep,
    rules: RuleServiceDep,
    name: str = Form(...),
    text: str = Form(""),
    address: str = Form(""),
    type_id: int = Form(...),
    rule_ids: List[int] = Form([]),
):
    accident = Accident(
        name=name,
        text=text,
        address=address,
        rules=await rules.find_by_ids(rule_ids),
    )
    try:
        await service.create(accident, type_id)
    except AccidentTypeNotFoundError as e:
        return await _render_form(
            request,
            types,
            rules,
            accident,
            action="/accidents/save",
            error=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/accidents/{accident_id}")
async def edit_form(
    request: Request,
    accident_id: int,
    service: AccidentServiceDep,
    types: AccidentTypeServiceDep,
    rules: RuleServiceDep,
):
    accident = await service.find_by_id(accident_id)
    if accident is None:
        return _not_found(request, accident_id)
    return await _render_form(
        request, types, rules, accident, action=f"/accidents/{accident_id}/update"
    )


@router.post("/accidents/{accident_id}/update")
async def update_accident(
    request: Request,
    accident_id: int,
    service: AccidentServiceDep,
    types: AccidentTypeServiceDep,
    rules: RuleServiceDep,
    name: str = Form(...),
    text: str = Form(""),
    address: str = Form(""),
    type_id: int = Form(...),
    rule_ids: List[int] = Form([]),
):
    accident = Accident(
        id=accident_id,
        name=name,
        text=text,
        address=address,
        rules=await rules.find_by_ids(rule_ids),
    )
    try:
        accident.type = await service.find_type(type_id)
    except AccidentTypeNotFoundError as e:
        return await _render_form(
            request,
            types,
            rules,
            accident,
            action=f"/accidents/{accident_id}/update",
            error=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if not await service.update(accident):
        return _not_found(request, accident_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/accidents/{accident_id}/delete")
async def delete_accident(
    request: Request, accident_id: int, service: AccidentServiceDep
):
    if not await service.delete_by_id(accident_id):
        return _not_found(request, accident_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
