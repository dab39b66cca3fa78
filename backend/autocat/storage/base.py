"""Store interfaces consumed by the rule service and the engine.

Both stores work on a user's whole collection at once: ``get_all`` reads
it, ``save_all`` atomically replaces it.
"""

from typing import Protocol

from autocat.schemas.internal import Rule, Transaction


class RuleStore(Protocol):
    async def get_all(self, user_id: str) -> list[Rule]: ...

    async def save_all(self, user_id: str, rules: list[Rule]) -> None: ...


class TransactionStore(Protocol):
    async def get_all(self, user_id: str) -> list[Transaction]: ...

    async def save_all(self, user_id: str, transactions: list[Transaction]) -> None:
        """Persist ``category_id`` for every given transaction."""
        ...
