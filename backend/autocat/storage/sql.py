"""SQLAlchemy-backed stores.

Each ``save_all`` is one database transaction: it either commits entirely or
rolls back and re-raises.
"""

import structlog
from sqlalchemy import bindparam, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from autocat.models.rule import CategorizationRule
from autocat.models.transaction import Transaction as TransactionRow
from autocat.schemas.internal import Rule, Transaction

logger = structlog.get_logger()

_RULE_FIELDS = (
    "patterns",
    "category_id",
    "description",
    "user_description",
    "priority",
    "is_active",
    "created_at",
    "updated_at",
)


class SqlRuleStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, user_id: str) -> list[Rule]:
        result = await self.db.execute(
            select(CategorizationRule)
            .where(CategorizationRule.user_id == user_id)
            .order_by(CategorizationRule.priority, CategorizationRule.created_at)
        )
        return [Rule.model_validate(row, from_attributes=True) for row in result.scalars()]

    async def save_all(self, user_id: str, rules: list[Rule]) -> None:
        try:
            result = await self.db.execute(
                select(CategorizationRule).where(CategorizationRule.user_id == user_id)
            )
            existing = {row.id: row for row in result.scalars()}

            for rule in rules:
                row = existing.pop(rule.id, None)
                if row is None:
                    row = CategorizationRule(id=rule.id, user_id=user_id)
                    self.db.add(row)
                for field in _RULE_FIELDS:
                    setattr(row, field, getattr(rule, field))

            for row in existing.values():
                await self.db.delete(row)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception("rule_save_failed", user_id=user_id)
            raise


class SqlTransactionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, user_id: str) -> list[Transaction]:
        result = await self.db.execute(
            select(TransactionRow)
            .where(TransactionRow.user_id == user_id)
            .order_by(TransactionRow.created_at, TransactionRow.id)
        )
        return [
            Transaction.model_validate(row, from_attributes=True)
            for row in result.scalars()
        ]

    async def save_all(self, user_id: str, transactions: list[Transaction]) -> None:
        if not transactions:
            return
        try:
            # One executemany UPDATE of category_id, limited to the owner's rows
            table = TransactionRow.__table__
            stmt = (
                update(table)
                .where(table.c.id == bindparam("txn_id"), table.c.user_id == user_id)
                .values(category_id=bindparam("new_category_id"))
            )
            await self.db.execute(
                stmt,
                [{"txn_id": t.id, "new_category_id": t.category_id} for t in transactions],
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception(
                "transaction_save_failed", user_id=user_id, count=len(transactions)
            )
            raise
