"""Internal domain models shared by the services and the stores.

These are the shapes the rule service and the categorization engine work
with, independent of how a store persists them.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Rule(BaseModel):
    """An auto-categorization rule owned by one user.

    ``priority`` is 1-based and dense across the owner's rules: the rule with
    priority 1 is tried first.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    patterns: list[str]
    category_id: str
    description: str | None = None
    user_description: str | None = None
    is_active: bool = True
    priority: int = Field(ge=1)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="before")
    @classmethod
    def migrate_single_pattern(cls, data: Any) -> Any:
        """Read legacy rules stored with a scalar ``pattern`` as ``patterns``."""
        if isinstance(data, dict) and "patterns" not in data and "pattern" in data:
            data = dict(data)
            legacy = data.pop("pattern")
            data["patterns"] = [legacy] if legacy else []
        return data


class Transaction(BaseModel):
    """The slice of a transaction the categorization engine reads.

    Only ``category_id`` is ever written back; the other fields belong to the
    ingestion pipeline.
    """

    id: str
    name: str | None = None
    merchant_name: str | None = None
    user_description: str | None = None
    category_id: str | None = None
