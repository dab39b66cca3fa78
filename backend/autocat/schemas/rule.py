"""Categorization rule request / response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RuleCreate(BaseModel):
    patterns: list[str]
    category_id: str
    description: str | None = Field(default=None, max_length=200)
    user_description: str | None = Field(default=None, max_length=200)
    is_active: bool = True


class RuleUpdate(BaseModel):
    # Priority changes go through reorder / move-up / move-down only
    model_config = ConfigDict(extra="forbid")

    patterns: list[str] | None = None
    category_id: str | None = None
    description: str | None = Field(default=None, max_length=200)
    user_description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None


class RuleResponse(BaseModel):
    id: str
    patterns: list[str]
    category_id: str
    description: str | None
    user_description: str | None
    is_active: bool
    priority: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReorderRequest(BaseModel):
    rule_ids: list[str]


class ApplyRulesRequest(BaseModel):
    force_recategorize: bool = False


class ApplyRulesResult(BaseModel):
    categorized: int
    recategorized: int
    total: int
    message: str


class PreviewResult(BaseModel):
    would_categorize: int
    would_recategorize: int
    total: int
    message: str
