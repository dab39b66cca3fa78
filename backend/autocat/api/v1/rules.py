"""Categorization rules API routes."""

from fastapi import APIRouter, Body, Depends

from autocat.api.deps import get_current_user_id, get_rule_engine, get_rule_service
from autocat.schemas.rule import (
    ApplyRulesRequest,
    ApplyRulesResult,
    PreviewResult,
    ReorderRequest,
    RuleCreate,
    RuleResponse,
    RuleUpdate,
)
from autocat.services.rule_engine import RuleEngine
from autocat.services.rule_service import RuleService

router = APIRouter()


@router.get("", response_model=list[RuleResponse])
async def list_rules(
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    """List the current user's rules, highest priority first."""
    return await service.list_rules(user_id)


@router.post("", response_model=RuleResponse, status_code=201)
async def create_rule(
    data: RuleCreate,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    """Create a rule; it goes to the end of the list."""
    return await service.create_rule(user_id, data)


@router.put("/reorder", response_model=list[RuleResponse])
async def reorder_rules(
    data: ReorderRequest,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    """Reorder all rules; ``rule_ids`` lists every rule, first = priority 1."""
    return await service.reorder_rules(user_id, data.rule_ids)


@router.patch("/{rule_id}", response_model=RuleResponse)
async def update_rule(
    rule_id: str,
    data: RuleUpdate,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    """Update an existing rule."""
    return await service.update_rule(user_id, rule_id, data)


@router.delete("/{rule_id}", status_code=204)
async def delete_rule(
    rule_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    """Delete a rule."""
    await service.delete_rule(user_id, rule_id)


@router.post("/{rule_id}/move-up", response_model=list[RuleResponse])
async def move_rule_up(
    rule_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    return await service.move_rule_up(user_id, rule_id)


@router.post("/{rule_id}/move-down", response_model=list[RuleResponse])
async def move_rule_down(
    rule_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RuleService = Depends(get_rule_service),
):
    return await service.move_rule_down(user_id, rule_id)


@router.post("/apply", response_model=ApplyRulesResult)
async def apply_rules(
    data: ApplyRulesRequest | None = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    engine: RuleEngine = Depends(get_rule_engine),
):
    """Apply active rules to the user's transactions."""
    force = data.force_recategorize if data else False
    return await engine.apply_rules(user_id, force_recategorize=force)


@router.post("/preview", response_model=PreviewResult)
async def preview_rules(
    data: ApplyRulesRequest | None = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    engine: RuleEngine = Depends(get_rule_engine),
):
    """Count what ``/apply`` would change, without changing it."""
    force = data.force_recategorize if data else False
    return await engine.preview(user_id, force_recategorize=force)
