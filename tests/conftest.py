"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
import httpx
from datetime import datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple, Union
from models import Base, SNAPSHOT_SCHEMAS

UPSTREAM_URL = "http://upstream.test"


# ============================================================================
# Database
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """
    SQLite engine with every snapshot schema mapped to the main database.

    Table names are unique across schemas, so the flattened layout is safe.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'snapshots.db'}",
        echo=False,
        poolclass=NullPool,  # Disable connection pooling for tests
        execution_options={
            "schema_translate_map": {schema: None for schema in SNAPSHOT_SCHEMAS}
        },
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with session_maker() as session:
        yield session


# ============================================================================
# Upstream
# ============================================================================

Route = Union[Tuple[int, Any], Exception]


class FakeUpstream:
    """
    In-memory upstream served through ``httpx.MockTransport``.

    Routes are keyed by exact URL path. Unknown paths answer 404.
    """

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, body: Any = None, status: int = 200) -> "FakeUpstream":
        self.routes[path] = (status, body)
        return self

    def fail(self, path: str, error: Exception) -> "FakeUpstream":
        self.routes[path] = error
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)

        if route is None:
            return httpx.Response(404, json={"error": "Not Found"})
        if isinstance(route, Exception):
            raise route

        status, body = route
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def params(self, index: int = 0) -> Dict[str, str]:
        return dict(self.requests[index].url.params)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def http(upstream) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with upstream.client() as client:
        yield client


# ============================================================================
# Time
# ============================================================================

class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> SleepRecorder:
    return SleepRecorder()


class StepClock:
    """Clock that advances one second per reading."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        self.readings: List[datetime] = []

    def __call__(self) -> datetime:
        value = self.current
        self.readings.append(value)
        self.current = value + timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


# ============================================================================
# Sample payloads
# ============================================================================

@pytest.fixture
def bitcoin_detail() -> Dict[str, Any]:
    """``/coins/bitcoin`` trimmed to the fields the coin snapshot reads"""
    return {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "hashing_algorithm": "SHA-256",
        "description": {"en": "Bitcoin is the first decentralized cryptocurrency."},
        "links": {"homepage": ["http://www.bitcoin.org", "", ""]},
        "genesis_date": "2009-01-03",
        "market_cap_rank": 1,
        "platforms": {"": ""},
        "detail_platforms": {"": {"decimal_place": None, "contract_address": ""}},
    }


@pytest.fixture
def usdc_detail() -> Dict[str, Any]:
    return {
        "id": "usd-coin",
        "symbol": "usdc",
        "name": "USDC",
        "platforms": {
            "ethereum": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
            "solana": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
            "tron": "",
        },
        "detail_platforms": {
            "ethereum": {"decimal_place": 6, "contract_address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"},
            "solana": {"decimal_place": 6, "contract_address": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"},
        },
    }


@pytest.fixture
def dex_pair() -> Dict[str, Any]:
    """``pair`` object of a DEX Screener pair lookup"""
    return {
        "chainId": "ethereum",
        "dexId": "uniswap",
        "pairAddress": "0x8ad599c3A0ff1De082011EFDDc58f1908eb6e6D8",
        "baseToken": {"address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", "symbol": "USDC"},
        "quoteToken": {"address": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", "symbol": "WETH"},
        "priceUsd": "1.0001",
        "liquidity": {"usd": 123456789.12, "base": 100, "quote": 50},
    }
