"""
Unit tests for source adapters (list shapes and row extraction)
"""

import pytest
from pydantic import ValidationError
from datetime import date
from decimal import Decimal
from core.exceptions import DataFormatError
from ingestion.extractors.api_client import MarketDataClient
from ingestion.sources import SOURCES, build_adapter
from ingestion.sources.contracts import ContractsSource
from ingestion.sources.price import PriceSource

UPSTREAM_URL = "http://upstream.test"


def make_adapter(name, http, **kwargs):
    return build_adapter(name, MarketDataClient(http), base_url=UPSTREAM_URL, **kwargs)


def rows_for(adapter, raw_item, raw_detail=None):
    item = adapter.parse_item(raw_item)
    detail = adapter.detail_model.model_validate(raw_detail) if adapter.has_detail else item
    return list(adapter.extract(item, detail))


class TestRegistry:
    def test_all_sources_registered(self):
        assert set(SOURCES) == {
            "coins", "contracts", "nfts", "categories", "companies", "derivatives",
            "exchanges", "platforms", "global", "search", "price", "onchain",
        }

    @pytest.mark.parametrize("name,cap,delay,has_detail", [
        ("coins", 100, 0.0, True),
        ("contracts", 100, 1.5, True),
        ("nfts", 10, 1.0, True),
        ("categories", None, 0.0, False),
        ("onchain", 1, 0.0, False),
    ])
    def test_limits(self, http, name, cap, delay, has_detail):
        adapter = make_adapter(name, http)
        assert adapter.item_cap == cap
        assert adapter.detail_delay == delay
        assert adapter.has_detail is has_detail

    def test_overrides(self, http):
        adapter = make_adapter("nfts", http, item_cap=3, detail_delay=0.0)
        assert adapter.item_cap == 3
        assert adapter.detail_delay == 0.0

    def test_unknown_source(self, http):
        with pytest.raises(KeyError):
            make_adapter("tickers", http)


class TestCoins:
    def test_detail_row(self, http, bitcoin_detail):
        adapter = make_adapter("coins", http)
        [row] = rows_for(adapter, {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"}, bitcoin_detail)

        assert row.id == "bitcoin"
        assert row.hashing_algorithm == "SHA-256"
        assert row.description.startswith("Bitcoin is")
        assert row.homepage == ["http://www.bitcoin.org"]
        assert row.genesis_date == date(2009, 1, 3)
        assert row.market_cap_rank == 1

    def test_missing_optional_structure(self, http):
        adapter = make_adapter("coins", http)
        [row] = rows_for(adapter, {"id": "newcoin"}, {"id": "newcoin", "genesis_date": "", "links": {"homepage": ["", ""]}})

        assert row.description is None
        assert row.homepage is None
        assert row.genesis_date is None
        assert row.market_cap_rank is None

    def test_detail_url(self, http):
        adapter = make_adapter("coins", http)
        assert adapter.detail_url(adapter.parse_item({"id": "bitcoin"})) == f"{UPSTREAM_URL}/coins/bitcoin"


class TestContracts:
    def test_one_row_per_platform(self, http, usdc_detail):
        adapter = make_adapter("contracts", http)
        rows = rows_for(adapter, {"id": "usd-coin"}, usdc_detail)

        assert [(r.platform, r.contract_address) for r in rows] == [
            ("ethereum", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"),
            ("solana", "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"),
        ]
        assert {r.coin_id for r in rows} == {"usd-coin"}
        assert {r.decimals for r in rows} == {6}
        assert {r.symbol for r in rows} == {"usdc"}

    def test_native_coin_yields_no_rows(self, http, bitcoin_detail):
        adapter = make_adapter("contracts", http)
        assert rows_for(adapter, {"id": "bitcoin"}, bitcoin_detail) == []

    def test_extraction_is_lazy(self, http, usdc_detail):
        adapter = make_adapter("contracts", http)
        item = adapter.parse_item({"id": "usd-coin"})
        rows = adapter.extract(item, adapter.detail_model.model_validate(usdc_detail))
        assert next(rows).platform == "ethereum"

    def test_coin_level_decimals_fallback(self, http):
        adapter = make_adapter("contracts", http)
        [row] = rows_for(adapter, {"id": "tok"}, {"platforms": {"ethereum": "0xabc"}, "decimals": 18})
        assert row.decimals == 18

    @pytest.mark.asyncio
    async def test_list_requests_platforms(self, http, upstream):
        upstream.add("/coins/list", [{"id": "usd-coin", "platforms": {"ethereum": "0xa0b8"}}])
        adapter = make_adapter("contracts", http)

        items = await adapter.fetch_list()

        assert isinstance(adapter, ContractsSource)
        assert items == [{"id": "usd-coin", "platforms": {"ethereum": "0xa0b8"}}]
        assert upstream.params() == {"include_platform": "true"}


class TestNfts:
    def test_usd_prices(self, http):
        adapter = make_adapter("nfts", http)
        [row] = rows_for(adapter, {"id": "cryptopunks"}, {
            "id": "cryptopunks",
            "name": "CryptoPunks",
            "symbol": "PUNK",
            "floor_price": {"native_currency": 29.5, "usd": 98000.25},
            "volume_24h": {"native_currency": 100.0},
        })

        assert row.floor_price == Decimal("98000.25")
        assert row.volume_24h is None

    def test_absent_price_maps(self, http):
        adapter = make_adapter("nfts", http)
        [row] = rows_for(adapter, {"id": "x"}, {"id": "x"})
        assert row.floor_price is None
        assert row.volume_24h is None


class TestSingleCallSources:
    def test_category(self, http):
        adapter = make_adapter("categories", http)
        [row] = rows_for(adapter, {"id": "layer-1", "name": "Layer 1 (L1)", "market_cap": 2.1e12, "volume_24h": None})
        assert row.category_id == "layer-1"
        assert row.market_cap == Decimal("2100000000000")
        assert row.volume_24h is None

    def test_derivative(self, http):
        adapter = make_adapter("derivatives", http)
        [row] = rows_for(adapter, {
            "id": "BTCUSDT-PERP",
            "market": "Binance (Futures)",
            "symbol": "BTCUSDT",
            "index_id": "BTC",
            "price": "67000.1",
            "contract_type": "perpetual",
        })
        assert row.id == "BTCUSDT-PERP"
        assert row.index_id == "BTC"
        assert row.price == Decimal("67000.1")

    def test_derivative_without_identity_is_rejected(self, http):
        adapter = make_adapter("derivatives", http)
        with pytest.raises(ValidationError):
            adapter.parse_item({"price": 1.0})

    def test_derivative_market_and_symbol_are_not_an_identity(self, http):
        adapter = make_adapter("derivatives", http)
        with pytest.raises(ValidationError):
            adapter.parse_item({"market": "Binance (Futures)", "symbol": "BTCUSDT", "price": "1"})

    def test_exchange(self, http):
        adapter = make_adapter("exchanges", http)
        [row] = rows_for(adapter, {
            "id": "binance",
            "name": "Binance",
            "year_established": 2017,
            "country": "Cayman Islands",
            "trade_volume_24h_btc": 123456.789,
            "trust_score": 10,
        })
        assert row.year_established == 2017
        assert row.trade_volume_24h_btc == Decimal("123456.789")

    def test_platform(self, http):
        adapter = make_adapter("platforms", http)
        [row] = rows_for(adapter, {"id": "ethereum", "name": "Ethereum", "chain_identifier": 1, "shortname": ""})
        assert row.chain_identifier == 1

    def test_platform_large_chain_identifier(self, http):
        adapter = make_adapter("platforms", http)
        [row] = rows_for(adapter, {"id": "palm", "name": "Palm", "chain_identifier": 11297108109})
        assert row.chain_identifier == 11297108109

    def test_exchange_out_of_range_trust_score(self, http):
        adapter = make_adapter("exchanges", http)
        [row] = rows_for(adapter, {"id": "binance", "name": "Binance", "trust_score": 1e20})
        assert row.id == "binance"
        assert row.trust_score is None

    def test_company_aliases(self, http):
        adapter = make_adapter("companies", http, coin_id="ethereum")
        [row] = rows_for(adapter, {
            "name": "Strategy",
            "symbol": "MSTR.US",
            "total_holdings": 226331,
            "total_current_value_usd": 15200000000,
            "percentage_of_total_supply": 1.078,
        })
        assert row.coin_id == "ethereum"
        assert row.total_value_usd == Decimal("15200000000")
        assert row.percentage_of_supply == Decimal("1.078")

    def test_trending(self, http):
        adapter = make_adapter("search", http)
        [row] = rows_for(adapter, {"item": {"id": "pepe", "name": "Pepe", "symbol": "PEPE", "market_cap_rank": 30, "score": 0}})
        assert row.id == "pepe"
        assert row.score == 0

    def test_global(self, http):
        adapter = make_adapter("global", http)
        [row] = rows_for(adapter, {
            "active_cryptocurrencies": 14000,
            "markets": 1100,
            "total_market_cap": {"usd": 2.5e12, "btc": 38000000},
            "total_volume": {"btc": 1500000},
            "market_cap_percentage": {"btc": 52.1, "eth": 16.8},
        })
        assert row.total_market_cap_usd == Decimal("2500000000000")
        assert row.total_volume_usd is None
        assert row.btc_dominance == Decimal("52.1")
        assert row.eth_dominance == Decimal("16.8")
        assert row.upcoming_icos is None


class TestPrice:
    def test_one_row_per_currency(self, http):
        adapter = make_adapter("price", http, coin_ids=["bitcoin"], vs_currencies=["usd", "jpy"])
        rows = rows_for(adapter, {"coin_id": "bitcoin", "quotes": {"usd": 50000.5, "usd_market_cap": 1e12}})

        assert [(r.vs_currency, r.price, r.market_cap) for r in rows] == [
            ("usd", Decimal("50000.5"), Decimal("1000000000000")),
            ("jpy", None, None),
        ]

    def test_coin_missing_from_response_yields_no_rows(self, http):
        adapter = make_adapter("price", http, coin_ids=["ripple"], vs_currencies=["usd"])
        assert rows_for(adapter, {"coin_id": "ripple", "quotes": None}) == []

    @pytest.mark.asyncio
    async def test_list_is_requested_coins(self, http, upstream):
        upstream.add("/simple/price", {"bitcoin": {"usd": 1.0}})
        adapter = make_adapter("price", http, coin_ids=["bitcoin", "ripple"], vs_currencies=["usd", "jpy"])

        items = await adapter.fetch_list()

        assert items == [
            {"coin_id": "bitcoin", "quotes": {"usd": 1.0}},
            {"coin_id": "ripple", "quotes": None},
        ]
        assert upstream.params() == {
            "ids": "bitcoin,ripple",
            "vs_currencies": "usd,jpy",
            "include_market_cap": "true",
            "include_24hr_vol": "true",
            "include_24hr_change": "true",
        }
        assert isinstance(adapter, PriceSource)


class TestOnchain:
    def test_pair_row(self, http, dex_pair):
        adapter = make_adapter("onchain", http)
        [row] = rows_for(adapter, dex_pair)

        assert row.chain_id == "ethereum"
        assert row.exchange == "uniswap"
        assert row.token_address == "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
        assert row.price == Decimal("1.0001")
        assert row.liquidity_usd == Decimal("123456789.12")

    def test_missing_fields_are_absent(self, http):
        adapter = make_adapter("onchain", http, chain_id="bsc", pair_address="0xpair")
        [row] = rows_for(adapter, {})

        assert row.chain_id == "bsc"
        assert row.pair_address == "0xpair"
        assert row.exchange is None
        assert row.price is None
        assert row.liquidity_usd is None

    @pytest.mark.asyncio
    async def test_list_falls_back_to_pairs(self, http, upstream, dex_pair):
        upstream.add("/pairs/ethereum/0xpair", {"schemaVersion": "1.0.0", "pairs": [dex_pair]})
        adapter = make_adapter("onchain", http, pair_address="0xpair")

        assert await adapter.fetch_list() == [dex_pair]

    @pytest.mark.asyncio
    async def test_list_without_pair(self, http, upstream):
        upstream.add("/pairs/ethereum/0xpair", {"schemaVersion": "1.0.0", "pair": None, "pairs": None})
        adapter = make_adapter("onchain", http, pair_address="0xpair")

        assert await adapter.fetch_list() == [None]


class TestListShapes:
    @pytest.mark.asyncio
    async def test_array_expected(self, http, upstream):
        upstream.add("/exchanges", {"error": "unexpected"})

        with pytest.raises(DataFormatError):
            await make_adapter("exchanges", http).fetch_list()

    @pytest.mark.asyncio
    async def test_companies_envelope(self, http, upstream):
        upstream.add("/companies/public_treasury/bitcoin", {
            "total_holdings": 1,
            "companies": [{"name": "Strategy", "symbol": "MSTR.US"}],
        })

        items = await make_adapter("companies", http, coin_id="bitcoin").fetch_list()
        assert items == [{"name": "Strategy", "symbol": "MSTR.US"}]

    @pytest.mark.asyncio
    async def test_companies_envelope_missing(self, http, upstream):
        upstream.add("/companies/public_treasury/bitcoin", {"total_holdings": 1})

        with pytest.raises(DataFormatError):
            await make_adapter("companies", http, coin_id="bitcoin").fetch_list()

    @pytest.mark.asyncio
    async def test_trending_envelope(self, http, upstream):
        upstream.add("/search/trending", {"coins": [{"item": {"id": "pepe"}}], "nfts": []})

        assert await make_adapter("search", http).fetch_list() == [{"item": {"id": "pepe"}}]

    @pytest.mark.asyncio
    async def test_global_data_is_single_item(self, http, upstream):
        upstream.add("/global", {"data": {"markets": 1100}})

        assert await make_adapter("global", http).fetch_list() == [{"markets": 1100}]
