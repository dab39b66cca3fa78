"""SQLAlchemy models."""

from autocat.models.base import Base
from autocat.models.rule import CategorizationRule
from autocat.models.transaction import Transaction

__all__ = [
    "Base",
    "CategorizationRule",
    "Transaction",
]
