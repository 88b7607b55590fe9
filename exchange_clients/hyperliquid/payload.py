"""
Signed request payload for the ``/exchange`` endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SignedPayload:
    """
    Final request body.

    ``vault_address`` is only set for operations routed through a vault;
    ``None`` means the signer's own account.
    """

    action: Dict[str, Any]
    nonce: int
    signature: Dict[str, Any]
    vault_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "action": self.action,
            "nonce": self.nonce,
            "signature": self.signature,
        }
        if self.vault_address is not None:
            payload["vaultAddress"] = self.vault_address
        return payload


class PayloadAssembler:
    """Pure construction of ``SignedPayload`` objects."""

    @staticmethod
    def assemble(
        action: Dict[str, Any],
        nonce: int,
        signature: Dict[str, Any],
        vault_address: Optional[str] = None,
    ) -> SignedPayload:
        return SignedPayload(
            action=action,
            nonce=nonce,
            signature=signature,
            vault_address=vault_address,
        )
