"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import datetime
from decimal import Decimal
from httpx import AsyncClient, ASGITransport

from fxjournal.api.main import app, get_cache, get_datasource
from fxjournal.core.entities.account import Account
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.infrastructure.cache.redis_service import RedisService
from fxjournal.infrastructure.gateways.in_memory import InMemoryJournalSource

# Day 11 at noon; the WEEK cutoff is midnight starting day 4
NOW = datetime(2025, 1, 11, 12, 0)


def make_trade(trade_id, pnl, settled_at, opened_at=None, account_id=1) -> TradeRecord:
    return TradeRecord(
        id=trade_id,
        account_id=account_id,
        pnl=None if pnl is None else Decimal(str(pnl)),
        opened_at=opened_at or settled_at,
        settled_at=settled_at,
    )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def scenario_trades():
    """+50, -20, +30 settled on days 1, 2 and 3 (morning)."""
    return [
        make_trade(1, 50, datetime(2025, 1, 1, 9, 0)),
        make_trade(2, -20, datetime(2025, 1, 2, 9, 0)),
        make_trade(3, 30, datetime(2025, 1, 3, 9, 0)),
    ]


@pytest.fixture
def journal(scenario_trades):
    return InMemoryJournalSource(
        accounts=[
            Account(id=1, name="Main", starting_balance=Decimal("1000")),
            Account(id=2, name="Prop", starting_balance=None),
        ],
        trades=scenario_trades + [
            make_trade(4, None, None, opened_at=datetime(2025, 1, 9, 8, 0)),
            make_trade(20, 15, datetime(2025, 1, 8, 10, 0), account_id=2),
        ],
    )


@pytest.fixture
async def client(journal):
    """Async HTTP client for testing FastAPI endpoints against the in-memory journal."""
    app.dependency_overrides[get_datasource] = lambda: journal
    app.dependency_overrides[get_cache] = lambda: RedisService()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
