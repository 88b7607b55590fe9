"""
Hyperliquid Exchange Client Module

Builds, signs and dispatches trade-execution actions for Hyperliquid.
"""

from .client import HyperliquidClient
from .client.utils import ActionBuilder, NonceGenerator, order_request_to_order_wire
from .config import HyperliquidSettings, Network
from .models import (
    CancelByCloidRequest,
    CancelRequest,
    LimitOrderType,
    ModifyRequest,
    OrderRequest,
    TriggerOrderType,
)
from .payload import PayloadAssembler, SignedPayload
from .signing import Signer, WalletSigner
from .symbols import (
    AssetIndexResolver,
    MetaSymbolDirectory,
    StaticSymbolDirectory,
    SymbolDirectory,
)
from .transport import HttpRequestTransport, RequestTransport

__all__ = [
    'HyperliquidClient',
    'ActionBuilder',
    'NonceGenerator',
    'order_request_to_order_wire',
    'HyperliquidSettings',
    'Network',
    'CancelByCloidRequest',
    'CancelRequest',
    'LimitOrderType',
    'ModifyRequest',
    'OrderRequest',
    'TriggerOrderType',
    'PayloadAssembler',
    'SignedPayload',
    'Signer',
    'WalletSigner',
    'AssetIndexResolver',
    'MetaSymbolDirectory',
    'StaticSymbolDirectory',
    'SymbolDirectory',
    'HttpRequestTransport',
    'RequestTransport',
]
