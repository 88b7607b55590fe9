"""
Hyperliquid client utilities package.

This package contains utility modules for the Hyperliquid exchange client:
- converters: Order wire encoding and the ActionBuilder
- nonce: Monotonic nonce generator
"""

from .converters import ActionBuilder, order_request_to_order_wire, order_type_to_wire
from .nonce import NonceGenerator, get_timestamp_ms

__all__ = [
    "ActionBuilder",
    "order_request_to_order_wire",
    "order_type_to_wire",
    "NonceGenerator",
    "get_timestamp_ms",
]
