"""Categorization rule model."""

from sqlalchemy import JSON, Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from autocat.models.base import Base, TimestampMixin


class CategorizationRule(Base, TimestampMixin):
    """A rule that assigns a category to transactions containing a pattern.

    ``patterns`` holds 1 to 5 strings; any one of them matching is enough.
    ``priority`` is dense per user (1..N), 1 being tried first. Density is
    maintained by the rule service rather than a unique constraint, since a
    reorder passes through intermediate duplicate priorities.
    """

    __tablename__ = "categorization_rules"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    patterns: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    # Not a foreign key: categories live in another service and may be
    # deleted while rules still reference them.
    category_id: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    user_description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        Index("idx_categorization_rules_user_priority", "user_id", "priority"),
    )
