"""Tests for symbol directories and the asset index resolver."""

import asyncio

import pytest

from exchange_clients.base_models import UnknownSymbolError
from exchange_clients.hyperliquid.symbols import (
    AssetIndexCache,
    AssetIndexResolver,
    MetaSymbolDirectory,
    StaticSymbolDirectory,
    SymbolDirectory,
    parse_perp_meta,
    parse_spot_meta,
)

from hl_fakes import DelayedDirectory

PERP_META = {
    "universe": [
        {"name": "ETH", "szDecimals": 4},
        {"name": "BTC", "szDecimals": 5},
        {"name": "SOL", "szDecimals": 2},
    ]
}

SPOT_META = {
    "tokens": [
        {"name": "USDC", "index": 0},
        {"name": "PURR", "index": 1},
        {"name": "HFUN", "index": 2},
    ],
    "universe": [
        {"name": "PURR/USDC", "tokens": [1, 0], "index": 0},
        {"name": "@1", "tokens": [2, 0], "index": 1},
    ],
}


class InfoTransport:
    def __init__(self):
        self.requests = []

    async def post_info(self, body, weight=1):
        self.requests.append((body["type"], weight))
        await asyncio.sleep(0)
        if body["type"] == "meta":
            return PERP_META
        return SPOT_META


class TestAssetIndexCache:
    def test_lookups_ignore_case_and_perp_suffix(self):
        cache = AssetIndexCache()
        cache.set("btc", 3)

        assert cache.get("BTC") == 3
        assert cache.get("BTC-PERP") == 3
        assert cache.has("Btc")
        assert cache.get("ETH") is None

    def test_replace_swaps_contents(self):
        cache = AssetIndexCache()
        cache.set_multiple({"BTC": 3, "ETH": 1})

        cache.replace({"SOL": 5})

        assert len(cache) == 1
        assert cache.get("BTC") is None
        assert cache.get("SOL") == 5

    def test_clear(self):
        cache = AssetIndexCache()
        cache.set("BTC", 3)
        cache.clear()
        assert len(cache) == 0


class TestMetaParsing:
    def test_perp_index_is_universe_position(self):
        assert parse_perp_meta(PERP_META) == {"ETH": 0, "BTC": 1, "SOL": 2}

    def test_spot_index_is_offset_pair_index(self):
        mapping = parse_spot_meta(SPOT_META)

        assert mapping["PURR/USDC"] == 10000
        assert mapping["@1"] == 10001
        assert mapping["HFUN/USDC"] == 10001


class TestStaticSymbolDirectory:
    @pytest.mark.asyncio
    async def test_lookup(self):
        directory = StaticSymbolDirectory({"BTC": 3})
        directory.add("ETH", 1)

        assert isinstance(directory, SymbolDirectory)
        assert await directory.get_asset_index("eth") == 1
        assert await directory.get_asset_index("DOGE") is None


class TestMetaSymbolDirectory:
    @pytest.mark.asyncio
    async def test_loads_once_on_first_lookup(self):
        transport = InfoTransport()
        directory = MetaSymbolDirectory(transport)

        assert directory.loaded is False
        results = await asyncio.gather(
            directory.get_asset_index("BTC"),
            directory.get_asset_index("PURR/USDC"),
            directory.get_asset_index("HFUN/USDC"),
        )

        assert results == [1, 10000, 10001]
        assert directory.loaded is True
        assert transport.requests == [("spotMeta", 20), ("meta", 20)]

    @pytest.mark.asyncio
    async def test_refresh_reloads(self):
        transport = InfoTransport()
        directory = MetaSymbolDirectory(transport, include_spot=False)

        await directory.get_asset_index("BTC")
        await directory.refresh()

        assert transport.requests == [("meta", 20), ("meta", 20)]
        assert await directory.get_asset_index("PURR/USDC") is None


class TestAssetIndexResolver:
    @pytest.mark.asyncio
    async def test_resolve_known_symbol(self, directory):
        resolver = AssetIndexResolver(directory)

        assert await resolver.resolve("BTC") == 3

    @pytest.mark.asyncio
    async def test_unknown_symbol_raises(self, directory):
        resolver = AssetIndexResolver(directory)

        with pytest.raises(UnknownSymbolError) as exc_info:
            await resolver.resolve("DOGE")

        assert exc_info.value.symbol == "DOGE"
        assert "Unknown asset: DOGE" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_resolve_many_empty(self, directory):
        assert await AssetIndexResolver(directory).resolve_many([]) == []

    @pytest.mark.asyncio
    async def test_resolve_many_keeps_input_order(self):
        # First symbol finishes last
        directory = DelayedDirectory(
            {"BTC": 3, "ETH": 1, "SOL": 5},
            {"BTC": 0.03, "ETH": 0.01, "SOL": 0.0},
        )

        indices = await AssetIndexResolver(directory).resolve_many(["BTC", "ETH", "SOL"])

        assert indices == [3, 1, 5]

    @pytest.mark.asyncio
    async def test_resolve_many_reports_first_failure_by_position(self):
        directory = DelayedDirectory({"BTC": 3}, {"FOO": 0.02, "BAR": 0.0})

        with pytest.raises(UnknownSymbolError) as exc_info:
            await AssetIndexResolver(directory).resolve_many(["BTC", "FOO", "BAR"])

        assert exc_info.value.symbol == "FOO"
