"""
Helper modules for the Hyperliquid exchange client.
"""

from .unified_logger import UnifiedLogger, get_logger, get_exchange_logger, get_core_logger

__all__ = [
    'UnifiedLogger',
    'get_logger',
    'get_exchange_logger',
    'get_core_logger',
]
