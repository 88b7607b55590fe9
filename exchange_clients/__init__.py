"""
Shared Exchange Clients Library

This library provides authenticated trade-execution clients for perpetual DEXs.

Modules:
    - base_models: Shared exceptions and credential validation
    - factory: Name-based client construction
    - hyperliquid: Hyperliquid signed-action client
"""

from .base_models import (
    ExchangeClientError,
    InvalidOrderError,
    MissingCredentialsError,
    SigningError,
    UnknownSymbolError,
    validate_credentials,
)
from .factory import ExchangeFactory

__all__ = [
    "ExchangeClientError",
    "InvalidOrderError",
    "MissingCredentialsError",
    "SigningError",
    "UnknownSymbolError",
    "validate_credentials",
    "ExchangeFactory",
]

__version__ = "1.0.0"
