"""In-process stores, used for tests and single-process tooling.

Stored objects are deep-copied on the way in and out so callers never
share state with the store.
"""

from autocat.schemas.internal import Rule, Transaction


class InMemoryRuleStore:
    def __init__(self, rules: dict[str, list[Rule]] | None = None):
        self._rules: dict[str, list[Rule]] = {}
        for user_id, user_rules in (rules or {}).items():
            self._rules[user_id] = [r.model_copy(deep=True) for r in user_rules]

    async def get_all(self, user_id: str) -> list[Rule]:
        return [r.model_copy(deep=True) for r in self._rules.get(user_id, [])]

    async def save_all(self, user_id: str, rules: list[Rule]) -> None:
        self._rules[user_id] = [r.model_copy(deep=True) for r in rules]


class InMemoryTransactionStore:
    def __init__(self, transactions: dict[str, list[Transaction]] | None = None):
        self._transactions: dict[str, list[Transaction]] = {}
        for user_id, txns in (transactions or {}).items():
            self._transactions[user_id] = [t.model_copy(deep=True) for t in txns]

    async def get_all(self, user_id: str) -> list[Transaction]:
        return [t.model_copy(deep=True) for t in self._transactions.get(user_id, [])]

    async def save_all(self, user_id: str, transactions: list[Transaction]) -> None:
        # Only category_id belongs to us; everything else is kept as stored.
        updates = {t.id: t.category_id for t in transactions}
        self._transactions[user_id] = [
            t.model_copy(update={"category_id": updates[t.id]}) if t.id in updates else t
            for t in self._transactions.get(user_id, [])
        ]
