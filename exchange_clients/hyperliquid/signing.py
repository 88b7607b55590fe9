"""
Signing for Hyperliquid actions.

Two schemes are used by the exchange:

* L1: signs the msgpack hash of an action together with the nonce and the
  optional vault address (orders, cancels, leverage, account actions).
* Typed transfer: EIP-712 over a flat, explicitly typed field list under a
  named primary type (USD send, spot send, withdrawal).

The client depends only on the ``Signer`` protocol.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hyperliquid.utils.signing import sign_inner, sign_l1_action, user_signed_payload

from exchange_clients.base_models import SigningError, validate_credentials
from exchange_clients.hyperliquid.config import Network

Signature = Dict[str, Any]


def _action_type(action: Any) -> str:
    if isinstance(action, dict):
        return str(action.get("type", "?"))
    return type(action).__name__


@runtime_checkable
class Signer(Protocol):
    """Produces signatures for both signing schemes."""

    async def sign_l1(
        self,
        action: Dict[str, Any],
        vault_address: Optional[str],
        nonce: int,
    ) -> Signature:
        ...

    async def sign_typed(
        self,
        fields: Dict[str, Any],
        primary_type: str,
        field_types: List[Dict[str, str]],
    ) -> Signature:
        ...


class WalletSigner:
    """
    Signer backed by a local secp256k1 key.

    The key stays inside the ``LocalAccount``; actions and payloads only ever
    see the resulting ``{r, s, v}`` signature. Any failure surfaces as
    ``SigningError`` with the underlying exception chained.
    """

    def __init__(self, private_key: Optional[str], network: Network = Network.MAINNET):
        validate_credentials("HYPERLIQUID_PRIVATE_KEY", private_key)
        try:
            self._wallet: LocalAccount = Account.from_key(private_key)
        except Exception as exc:
            raise SigningError(f"Invalid private key: {type(exc).__name__}") from exc
        self.network = Network(network)

    @property
    def address(self) -> str:
        return self._wallet.address

    async def sign_l1(
        self,
        action: Dict[str, Any],
        vault_address: Optional[str],
        nonce: int,
    ) -> Signature:
        try:
            return sign_l1_action(
                self._wallet,
                action,
                vault_address,
                nonce,
                None,  # expires_after
                self.network.is_mainnet,
            )
        except Exception as exc:
            raise SigningError(f"L1 signing failed for {_action_type(action)}: {exc}") from exc

    async def sign_typed(
        self,
        fields: Dict[str, Any],
        primary_type: str,
        field_types: List[Dict[str, str]],
    ) -> Signature:
        try:
            # Copy so the chain id and field values we were given are exactly what is signed
            message = dict(fields)
            data = user_signed_payload(primary_type, [dict(t) for t in field_types], message)
            return sign_inner(self._wallet, data)
        except Exception as exc:
            raise SigningError(f"Typed-data signing failed for {primary_type}: {exc}") from exc
