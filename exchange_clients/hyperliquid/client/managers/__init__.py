"""
Hyperliquid client managers package.

This package contains modular manager components for the Hyperliquid exchange client:
- order_manager: Order placement, cancellation and modification
- account_manager: Leverage, margin, transfers, vaults and referrals
"""

from .order_manager import HyperliquidOrderManager
from .account_manager import HyperliquidAccountManager

__all__ = [
    "HyperliquidOrderManager",
    "HyperliquidAccountManager",
]
