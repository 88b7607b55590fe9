"""
Hyperliquid client package.

This package contains the modular Hyperliquid exchange client implementation:
- core: Main HyperliquidClient class wiring the sign-and-dispatch pipeline
- managers: Order and account manager classes
- utils: Action builder, order wire converters and nonce generator
"""

from .core import HyperliquidClient

__all__ = ["HyperliquidClient"]
