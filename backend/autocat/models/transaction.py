"""Transaction model.

Rows are written by the ingestion pipeline; categorization only updates
``category_id``.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from autocat.models.base import Base, TimestampMixin


class Transaction(Base, TimestampMixin):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    merchant_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    user_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    category_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (Index("idx_transactions_user", "user_id"),)
