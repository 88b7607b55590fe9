"""
Typed request models accepted by the Hyperliquid client.

These describe trading intents in human terms (symbols, sides, decimals).
They are converted to wire actions by ``client.utils.converters``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from exchange_clients.base_models import InvalidOrderError

Number = Union[Decimal, int, float, str]

VALID_TIFS = ("Gtc", "Ioc", "Alo")
VALID_TPSL = ("tp", "sl")


@dataclass(frozen=True)
class LimitOrderType:
    """Resting limit order. ``tif`` is one of Gtc, Ioc or Alo (post-only)."""

    tif: str = "Gtc"

    def __post_init__(self) -> None:
        if self.tif not in VALID_TIFS:
            raise InvalidOrderError(f"Invalid time-in-force: {self.tif!r} (expected one of {VALID_TIFS})")


@dataclass(frozen=True)
class TriggerOrderType:
    """Take-profit / stop-loss trigger order."""

    trigger_px: Number
    is_market: bool
    tpsl: str

    def __post_init__(self) -> None:
        if self.tpsl not in VALID_TPSL:
            raise InvalidOrderError(f"Invalid tpsl: {self.tpsl!r} (expected 'tp' or 'sl')")


OrderType = Union[LimitOrderType, TriggerOrderType]


@dataclass(frozen=True)
class OrderRequest:
    """
    A single order intent.

    Attributes:
        coin: Trading symbol (e.g. "BTC", "PURR/USDC")
        side: "buy" or "sell"
        price: Limit price
        size: Order size in base units
        order_type: Limit or trigger order type (defaults to GTC limit)
        reduce_only: If True, order can only reduce an existing position
        cloid: Optional client order id (0x + 32 hex chars)
    """

    coin: str
    side: str
    price: Number
    size: Number
    order_type: OrderType = LimitOrderType()
    reduce_only: bool = False
    cloid: Optional[str] = None

    @property
    def is_buy(self) -> bool:
        side = self.side.lower()
        if side == "buy":
            return True
        if side == "sell":
            return False
        raise InvalidOrderError(f"Invalid side: {self.side}")


@dataclass(frozen=True)
class CancelRequest:
    """Cancel an order by exchange-assigned order id."""

    coin: str
    oid: int


@dataclass(frozen=True)
class CancelByCloidRequest:
    """Cancel an order by client order id."""

    coin: str
    cloid: str


@dataclass(frozen=True)
class ModifyRequest:
    """Replace an open order (by oid or cloid) with ``order``."""

    oid: Union[int, str]
    order: OrderRequest


__all__ = [
    "Number",
    "LimitOrderType",
    "TriggerOrderType",
    "OrderType",
    "OrderRequest",
    "CancelRequest",
    "CancelByCloidRequest",
    "ModifyRequest",
]
