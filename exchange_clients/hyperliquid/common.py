"""
Common utilities for Hyperliquid exchange

Wire-format constants and numeric encoders shared by the action builders,
the signer and the symbol directories.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Any, Optional

from exchange_clients.base_models import InvalidOrderError


class ExchangeType:
    """Action discriminators accepted by the ``/exchange`` endpoint."""

    ORDER = "order"
    CANCEL = "cancel"
    CANCEL_BY_CLOID = "cancelByCloid"
    SCHEDULE_CANCEL = "scheduleCancel"
    MODIFY = "modify"
    BATCH_MODIFY = "batchModify"
    UPDATE_LEVERAGE = "updateLeverage"
    UPDATE_ISOLATED_MARGIN = "updateIsolatedMargin"
    USD_SEND = "usdSend"
    SPOT_SEND = "spotSend"
    WITHDRAW = "withdraw3"
    SPOT_USER = "spotUser"
    VAULT_TRANSFER = "vaultTransfer"
    SET_REFERRER = "setReferrer"


class InfoType:
    """Request types for the ``/info`` endpoint used by symbol directories."""

    META = "meta"
    SPOT_META = "spotMeta"


EXCHANGE_ENDPOINT = "/exchange"
INFO_ENDPOINT = "/info"

MAINNET_API_URL = "https://api.hyperliquid.xyz"
TESTNET_API_URL = "https://api.hyperliquid-testnet.xyz"

# Arbitrum One; signed verbatim into every transfer-class action
DEFAULT_SIGNATURE_CHAIN_ID = "0xa4b1"

# Spot pairs are addressed as 10000 + index in spotMeta.universe
SPOT_ASSET_OFFSET = 10000

DEFAULT_ORDER_GROUPING = "na"
DEFAULT_REQUEST_WEIGHT = 1
META_REQUEST_WEIGHT = 20

WIRE_DECIMALS = 8
FLOAT_WIRE_TOLERANCE = 1e-12
USD_DECIMALS = 6

_CLOID_PATTERN = re.compile(r"^0x[0-9a-fA-F]{32}$")


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """
    Convert a numeric input (str, int, float, Decimal) to Decimal.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal('0.1')``.

    Raises:
        InvalidOrderError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise InvalidOrderError(f"{field_name} must be numeric, got bool")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidOrderError(f"{field_name} is not a number: {value!r}") from None
    if not result.is_finite():
        raise InvalidOrderError(f"{field_name} must be finite, got {value!r}")
    return result


def _format_plain(value: Decimal) -> str:
    normalized = value.normalize()
    if normalized.is_zero():
        return "0"
    return f"{normalized:f}"


def decimal_to_wire(value: Any, field_name: str = "value") -> str:
    """
    Encode a price or size as the canonical wire string.

    The value is rounded to 8 decimal places. String and Decimal inputs that
    would lose precision are rejected rather than silently rounded; floats are
    accepted when the rounded value is within 1e-12 of them, so binary noise
    such as ``0.1 + 0.2`` encodes as ``"0.3"``. Trailing zeros are stripped and
    negative zero becomes ``"0"``.

    Examples:
        >>> decimal_to_wire("50000")
        '50000'
        >>> decimal_to_wire(0.1)
        '0.1'
    """
    number = to_decimal(value, field_name)
    quantum = Decimal(1).scaleb(-WIRE_DECIMALS)
    try:
        rounded = number.quantize(quantum, rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        raise InvalidOrderError(f"{field_name} {value!r} is out of range") from None
    if isinstance(value, float):
        lossy = abs(float(rounded) - value) >= FLOAT_WIRE_TOLERANCE
    else:
        lossy = rounded != number
    if lossy:
        raise InvalidOrderError(
            f"{field_name} {value!r} has more than {WIRE_DECIMALS} decimal places"
        )
    return _format_plain(rounded)


def amount_to_wire(value: Any, field_name: str = "amount") -> str:
    """
    Encode a transfer amount as a plain decimal string (``100`` -> ``"100"``).

    Raises:
        InvalidOrderError: If the amount is negative or not a number.
    """
    number = to_decimal(value, field_name)
    if number < 0:
        raise InvalidOrderError(f"{field_name} must not be negative, got {value!r}")
    return _format_plain(number)


def to_usd_micro_units(value: Any, field_name: str = "usdc") -> int:
    """
    Scale a USD amount to integer micro-units (x10^6).

    Examples:
        >>> to_usd_micro_units(50)
        50000000

    Raises:
        InvalidOrderError: If the amount has sub-micro precision.
    """
    number = to_decimal(value, field_name)
    scaled = number.scaleb(USD_DECIMALS)
    if scaled != scaled.to_integral_value():
        raise InvalidOrderError(
            f"{field_name} {value!r} has more than {USD_DECIMALS} decimal places"
        )
    return int(scaled)


def validate_cloid(cloid: Optional[str]) -> Optional[str]:
    """
    Check that a client order id is ``0x`` followed by 32 hex characters.

    Returns the cloid unchanged (or None when not provided).
    """
    if cloid is None:
        return None
    if not isinstance(cloid, str) or not _CLOID_PATTERN.match(cloid):
        raise InvalidOrderError(f"cloid must be a 16-byte hex string like 0x + 32 hex chars, got {cloid!r}")
    return cloid


def normalize_symbol(symbol: str) -> str:
    """
    Normalize a Hyperliquid symbol for directory lookups.

    Perpetual suffixes are dropped ("BTC-PERP" -> "BTC"); spot pairs keep
    their slash form ("PURR/USDC").
    """
    normalized = symbol.strip().upper()
    for suffix in ("-PERP", "-USD", "-USDC"):
        if normalized.endswith(suffix):
            normalized = normalized[: -len(suffix)]
            break
    return normalized
