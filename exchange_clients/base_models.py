"""
Shared exceptions and utilities for exchange clients.
"""

from __future__ import annotations

from typing import List, Optional


class ExchangeClientError(Exception):
    """Base class for errors raised locally by exchange clients."""
    pass


class MissingCredentialsError(ExchangeClientError):
    """Raised when exchange credentials are missing or invalid (placeholders)."""
    pass


class UnknownSymbolError(ExchangeClientError):
    """Raised when a symbol has no resolvable asset index."""

    def __init__(self, symbol: str):
        super().__init__(f"Unknown asset: {symbol}")
        self.symbol = symbol


class InvalidOrderError(ExchangeClientError, ValueError):
    """Raised when request parameters cannot be encoded to the wire format."""
    pass


class SigningError(ExchangeClientError):
    """Raised by a signer on key or cryptographic failure."""
    pass


def validate_credentials(
    credential_name: str,
    credential_value: Optional[str],
    placeholder_values: Optional[List[str]] = None,
) -> None:
    """
    Validate exchange credentials to ensure they're not missing or placeholders.

    Args:
        credential_name: Name of the credential (e.g., 'HYPERLIQUID_PRIVATE_KEY')
        credential_value: Value of the credential from environment
        placeholder_values: List of placeholder values to reject

    Raises:
        MissingCredentialsError: If credential is missing or is a placeholder
    """
    if placeholder_values is None:
        placeholder_values = [
            "your_private_key_here",
            "your_wallet_address_here",
            "your_vault_address_here",
            "PLACEHOLDER",
            "placeholder",
            "",
        ]

    if not credential_value:
        raise MissingCredentialsError(f"Missing {credential_name} environment variable")

    if credential_value in placeholder_values:
        raise MissingCredentialsError(f"{credential_name} is not configured (placeholder or empty)")


__all__ = [
    "ExchangeClientError",
    "MissingCredentialsError",
    "UnknownSymbolError",
    "InvalidOrderError",
    "SigningError",
    "validate_credentials",
]
