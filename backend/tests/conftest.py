"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from autocat.api.deps import get_rule_store, get_transaction_store
from autocat.main import app
from autocat.schemas.internal import Transaction
from autocat.services.rule_engine import RuleEngine
from autocat.services.rule_service import RuleService
from autocat.storage.memory import InMemoryRuleStore, InMemoryTransactionStore

USER_ID = "user-1"


@pytest.fixture
def rule_store():
    return InMemoryRuleStore()


@pytest.fixture
def transaction_store():
    return InMemoryTransactionStore()


@pytest.fixture
def service(rule_store):
    return RuleService(rule_store)


@pytest.fixture
def engine(rule_store, transaction_store):
    return RuleEngine(rule_store, transaction_store)


@pytest.fixture
def make_transaction():
    counter = iter(range(1, 10_000))

    def _make(**fields) -> Transaction:
        fields.setdefault("id", f"txn-{next(counter)}")
        return Transaction(**fields)

    return _make


@pytest.fixture
async def client(rule_store, transaction_store):
    """Async test client for the FastAPI app, backed by in-memory stores."""
    app.dependency_overrides[get_rule_store] = lambda: rule_store
    app.dependency_overrides[get_transaction_store] = lambda: transaction_store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User-Id": USER_ID},
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
