"""Shared API dependencies."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from autocat.core.database import get_db
from autocat.core.security import get_current_user_id
from autocat.services.rule_engine import RuleEngine
from autocat.services.rule_service import RuleService
from autocat.storage.base import RuleStore, TransactionStore
from autocat.storage.sql import SqlRuleStore, SqlTransactionStore

__all__ = [
    "get_db",
    "get_current_user_id",
    "get_rule_store",
    "get_transaction_store",
    "get_rule_service",
    "get_rule_engine",
]


def get_rule_store(db: AsyncSession = Depends(get_db)) -> RuleStore:
    return SqlRuleStore(db)


def get_transaction_store(db: AsyncSession = Depends(get_db)) -> TransactionStore:
    return SqlTransactionStore(db)


def get_rule_service(
    request: Request,
    store: RuleStore = Depends(get_rule_store),
) -> RuleService:
    # The lock registry lives on the app so every request shares it
    return RuleService(store, locks=request.app.state.rule_locks)


def get_rule_engine(
    rules: RuleStore = Depends(get_rule_store),
    transactions: TransactionStore = Depends(get_transaction_store),
) -> RuleEngine:
    return RuleEngine(rules, transactions)
