"""
Symbol to asset-index resolution for Hyperliquid.

``SymbolDirectory`` implementations own where indices come from and how fresh
they are; ``AssetIndexResolver`` is the fail-fast front door used by the
client before any action is built.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from exchange_clients.base_models import UnknownSymbolError
from exchange_clients.hyperliquid.common import (
    META_REQUEST_WEIGHT,
    SPOT_ASSET_OFFSET,
    InfoType,
    normalize_symbol,
)


@runtime_checkable
class SymbolDirectory(Protocol):
    """Lookup of protocol asset indices. Returns None for unknown symbols."""

    async def get_asset_index(self, symbol: str) -> Optional[int]:
        ...


class AssetIndexCache:
    """
    Case-insensitive symbol -> asset index map.

    Perpetual suffixes are ignored so "BTC" and "BTC-PERP" share one entry.
    """

    def __init__(self):
        """Initialize empty cache."""
        self._cache: Dict[str, int] = {}

    def get(self, symbol: str) -> Optional[int]:
        return self._cache.get(normalize_symbol(symbol))

    def set(self, symbol: str, asset_index: int) -> None:
        self._cache[normalize_symbol(symbol)] = asset_index

    def set_multiple(self, symbol_to_index: Mapping[str, int]) -> None:
        for symbol, asset_index in symbol_to_index.items():
            self.set(symbol, asset_index)

    def replace(self, symbol_to_index: Mapping[str, int]) -> None:
        """Swap the whole mapping at once so readers never see a half-loaded cache."""
        fresh: Dict[str, int] = {}
        for symbol, asset_index in symbol_to_index.items():
            fresh[normalize_symbol(symbol)] = asset_index
        self._cache = fresh

    def clear(self) -> None:
        self._cache.clear()

    def has(self, symbol: str) -> bool:
        return normalize_symbol(symbol) in self._cache

    def __len__(self) -> int:
        return len(self._cache)


class StaticSymbolDirectory:
    """In-memory directory built from a fixed mapping."""

    def __init__(self, mapping: Optional[Mapping[str, int]] = None):
        self._cache = AssetIndexCache()
        if mapping:
            self._cache.set_multiple(mapping)

    def add(self, symbol: str, asset_index: int) -> None:
        self._cache.set(symbol, asset_index)

    async def get_asset_index(self, symbol: str) -> Optional[int]:
        return self._cache.get(symbol)


def parse_perp_meta(meta: Mapping[str, Any]) -> Dict[str, int]:
    """Perpetual asset index is the position in ``meta.universe``."""
    return {entry["name"]: index for index, entry in enumerate(meta.get("universe", []))}


def parse_spot_meta(spot_meta: Mapping[str, Any]) -> Dict[str, int]:
    """
    Spot asset index is ``10000 + pair index``.

    Pairs are reachable by their listed name ("PURR/USDC", "@107") and, when
    the name is an alias, by "BASE/QUOTE" built from the token list.
    """
    token_names = {token["index"]: token["name"] for token in spot_meta.get("tokens", [])}
    mapping: Dict[str, int] = {}
    for position, pair in enumerate(spot_meta.get("universe", [])):
        asset_index = SPOT_ASSET_OFFSET + pair.get("index", position)
        mapping[pair["name"]] = asset_index

        tokens = pair.get("tokens") or []
        if len(tokens) == 2 and tokens[0] in token_names and tokens[1] in token_names:
            pair_name = f"{token_names[tokens[0]]}/{token_names[tokens[1]]}"
            mapping.setdefault(pair_name, asset_index)
    return mapping


class MetaSymbolDirectory:
    """
    Directory backed by the exchange's ``meta`` and ``spotMeta`` info endpoints.

    The universe is loaded once on first lookup and cached; ``refresh()``
    reloads it. Perpetual names take precedence over spot aliases.
    """

    def __init__(self, transport: Any, include_spot: bool = True, logger: Any = None):
        """
        Args:
            transport: Object exposing ``post_info(body, weight)``
            include_spot: Also load spot pairs
            logger: Optional logger
        """
        self.transport = transport
        self.include_spot = include_spot
        self.logger = logger
        self._cache = AssetIndexCache()
        self._loaded = False
        self._load_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def refresh(self) -> None:
        """Reload the universe from the exchange."""
        async with self._load_lock:
            await self._load()

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._load_lock:
            if not self._loaded:
                await self._load()

    async def _load(self) -> None:
        mapping: Dict[str, int] = {}
        if self.include_spot:
            spot_meta = await self.transport.post_info({"type": InfoType.SPOT_META}, META_REQUEST_WEIGHT)
            mapping.update(parse_spot_meta(spot_meta))

        meta = await self.transport.post_info({"type": InfoType.META}, META_REQUEST_WEIGHT)
        mapping.update(parse_perp_meta(meta))

        self._cache.replace(mapping)
        self._loaded = True
        if self.logger:
            self.logger.info(f"[HYPERLIQUID] Loaded {len(self._cache)} asset indices")

    async def get_asset_index(self, symbol: str) -> Optional[int]:
        await self._ensure_loaded()
        return self._cache.get(symbol)


class AssetIndexResolver:
    """Resolve symbols to asset indices, failing fast on unknown symbols."""

    def __init__(self, directory: SymbolDirectory, logger: Any = None):
        self.directory = directory
        self.logger = logger

    async def resolve(self, symbol: str) -> int:
        """
        Args:
            symbol: Trading symbol (e.g. "BTC")

        Returns:
            Asset index for ``symbol``

        Raises:
            UnknownSymbolError: If the directory has no mapping
        """
        index = await self.directory.get_asset_index(symbol)
        if index is None:
            if self.logger:
                self.logger.error(f"❌ [HYPERLIQUID] Unknown asset: {symbol}")
            raise UnknownSymbolError(symbol)
        return index

    async def resolve_many(self, symbols: Iterable[str]) -> List[int]:
        """
        Resolve several symbols concurrently.

        Results are positional: ``result[i]`` belongs to ``symbols[i]``
        regardless of which lookup completes first.
        """
        symbol_list: Sequence[str] = list(symbols)
        if not symbol_list:
            return []
        results = await asyncio.gather(
            *(self.resolve(symbol) for symbol in symbol_list),
            return_exceptions=True,
        )
        # Report the first failure by input position, not by completion order
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)
