"""Rule and transaction collection stores."""

from autocat.storage.base import RuleStore, TransactionStore
from autocat.storage.memory import InMemoryRuleStore, InMemoryTransactionStore
from autocat.storage.sql import SqlRuleStore, SqlTransactionStore

__all__ = [
    "RuleStore",
    "TransactionStore",
    "InMemoryRuleStore",
    "InMemoryTransactionStore",
    "SqlRuleStore",
    "SqlTransactionStore",
]
