"""Applies a user's active rules to their transactions.

One read of the rules, one read of the transactions, and at most one bulk
write per call, whatever the batch size.
"""

from dataclasses import dataclass

import structlog

from autocat.schemas.internal import Rule, Transaction
from autocat.schemas.rule import ApplyRulesResult, PreviewResult
from autocat.services.matcher import matches_text, normalized_patterns, select_search_text
from autocat.services.ordering import sort_by_priority
from autocat.storage.base import RuleStore, TransactionStore

logger = structlog.get_logger()


@dataclass
class CategorizationPlan:
    """What an apply pass would do, computed without touching the store."""

    transactions: list[Transaction]
    assignments: dict[str, str]  # transaction id -> category id
    categorized: int = 0
    recategorized: int = 0

    @property
    def total(self) -> int:
        return len(self.transactions)


def plan_categorization(
    rules: list[Rule],
    transactions: list[Transaction],
    force_recategorize: bool = False,
) -> CategorizationPlan:
    """First-match assignment of active rules, in priority order."""
    # Lowercase every pattern once for the whole pass
    compiled = [
        (rule, normalized_patterns(rule))
        for rule in sort_by_priority(rules)
        if rule.is_active
    ]

    plan = CategorizationPlan(transactions=transactions, assignments={})
    for txn in transactions:
        if txn.category_id is not None and not force_recategorize:
            continue

        text = select_search_text(txn)
        if text is None:
            continue
        text = text.lower()

        for rule, patterns in compiled:
            if matches_text(text, patterns):
                plan.assignments[txn.id] = rule.category_id
                if txn.category_id is None:
                    plan.categorized += 1
                else:
                    plan.recategorized += 1
                break  # first matching rule wins
    return plan


class RuleEngine:
    def __init__(self, rules: RuleStore, transactions: TransactionStore):
        self.rules = rules
        self.transactions = transactions

    async def apply_rules(
        self, user_id: str, force_recategorize: bool = False
    ) -> ApplyRulesResult:
        """Categorize the user's transactions.

        Without ``force_recategorize`` only uncategorized transactions are
        considered. With it, every matching transaction gets the winning
        rule's category, counted as recategorized if it already had one.
        """
        plan = await self._plan(user_id, force_recategorize)

        if plan.assignments:
            updated = [
                txn.model_copy(update={"category_id": plan.assignments[txn.id]})
                if txn.id in plan.assignments
                else txn
                for txn in plan.transactions
            ]
            await self.transactions.save_all(user_id, updated)

        if force_recategorize:
            message = (
                f"Categorized {plan.categorized} new and recategorized "
                f"{plan.recategorized} existing transactions"
            )
        else:
            message = f"Categorized {plan.categorized} of {plan.total} transactions"

        logger.info(
            "rules_applied",
            user_id=user_id,
            force_recategorize=force_recategorize,
            categorized=plan.categorized,
            recategorized=plan.recategorized,
            total=plan.total,
        )
        return ApplyRulesResult(
            categorized=plan.categorized,
            recategorized=plan.recategorized,
            total=plan.total,
            message=message,
        )

    async def preview(self, user_id: str, force_recategorize: bool = False) -> PreviewResult:
        """Same counts as :meth:`apply_rules`, without writing anything."""
        plan = await self._plan(user_id, force_recategorize)
        return PreviewResult(
            would_categorize=plan.categorized,
            would_recategorize=plan.recategorized,
            total=plan.total,
            message=(
                f"Would categorize {plan.categorized} and recategorize "
                f"{plan.recategorized} of {plan.total} transactions"
            ),
        )

    async def _plan(self, user_id: str, force_recategorize: bool) -> CategorizationPlan:
        rules = await self.rules.get_all(user_id)
        transactions = await self.transactions.get_all(user_id)
        return plan_categorization(rules, transactions, force_recategorize)
