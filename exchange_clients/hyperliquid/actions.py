"""
Wire action variants for the Hyperliquid ``/exchange`` endpoint.

Each operation kind has exactly one variant carrying exactly the fields its
wire contract requires. ``to_wire()`` returns a fresh dict whose key order is
the order the remote engine hashes, with ``type`` first. L1 signatures cover
the msgpack encoding of that dict, so the order is part of the contract.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from exchange_clients.hyperliquid.common import DEFAULT_ORDER_GROUPING, ExchangeType

OrderWire = Dict[str, Any]
SignTypes = Tuple[Dict[str, str], ...]


class Action(ABC):
    """Base class for all action variants."""

    TYPE: ClassVar[str]

    @abstractmethod
    def to_wire(self) -> Dict[str, Any]:
        """Return the wire dict with ``type`` first."""


@dataclass(frozen=True)
class PlaceOrderAction(Action):
    TYPE: ClassVar[str] = ExchangeType.ORDER

    orders: Tuple[OrderWire, ...]
    grouping: str = DEFAULT_ORDER_GROUPING

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "orders": [copy.deepcopy(order) for order in self.orders],
            "grouping": self.grouping,
        }


@dataclass(frozen=True)
class CancelAction(Action):
    """Cancels as ``(asset, oid)`` pairs in caller order."""

    TYPE: ClassVar[str] = ExchangeType.CANCEL

    cancels: Tuple[Tuple[int, int], ...]

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "cancels": [{"a": asset, "o": oid} for asset, oid in self.cancels],
        }


@dataclass(frozen=True)
class CancelByCloidAction(Action):
    TYPE: ClassVar[str] = ExchangeType.CANCEL_BY_CLOID

    cancels: Tuple[Tuple[int, str], ...]

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "cancels": [{"asset": asset, "cloid": cloid} for asset, cloid in self.cancels],
        }


@dataclass(frozen=True)
class ModifyAction(Action):
    TYPE: ClassVar[str] = ExchangeType.MODIFY

    oid: Union[int, str]
    order: OrderWire

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "oid": self.oid,
            "order": copy.deepcopy(self.order),
        }


@dataclass(frozen=True)
class BatchModifyAction(Action):
    """Modifies as ``(oid, order_wire)`` pairs in caller order."""

    TYPE: ClassVar[str] = ExchangeType.BATCH_MODIFY

    modifies: Tuple[Tuple[Union[int, str], OrderWire], ...]

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "modifies": [
                {"oid": oid, "order": copy.deepcopy(order)} for oid, order in self.modifies
            ],
        }


@dataclass(frozen=True)
class UpdateLeverageAction(Action):
    TYPE: ClassVar[str] = ExchangeType.UPDATE_LEVERAGE

    asset: int
    is_cross: bool
    leverage: int

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "asset": self.asset,
            "isCross": self.is_cross,
            "leverage": self.leverage,
        }


@dataclass(frozen=True)
class UpdateIsolatedMarginAction(Action):
    TYPE: ClassVar[str] = ExchangeType.UPDATE_ISOLATED_MARGIN

    asset: int
    is_buy: bool
    ntli: int

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "asset": self.asset,
            "isBuy": self.is_buy,
            "ntli": self.ntli,
        }


@dataclass(frozen=True)
class UserSignedAction(Action):
    """
    Transfer-class action signed with the typed-data scheme.

    ``PRIMARY_TYPE`` and ``SIGN_TYPES`` name the schema the engine verifies;
    ``time`` doubles as the request nonce.
    """

    PRIMARY_TYPE: ClassVar[str]
    SIGN_TYPES: ClassVar[SignTypes]

    hyperliquid_chain: str
    signature_chain_id: str
    destination: str
    amount: str
    time: int

    def _body(self) -> Dict[str, Any]:
        return {"destination": self.destination, "amount": self.amount}

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {
            "type": self.TYPE,
            "hyperliquidChain": self.hyperliquid_chain,
            "signatureChainId": self.signature_chain_id,
        }
        wire.update(self._body())
        wire["time"] = self.time
        return wire

    @classmethod
    def sign_types(cls) -> List[Dict[str, str]]:
        return [dict(field) for field in cls.SIGN_TYPES]


@dataclass(frozen=True)
class UsdSendAction(UserSignedAction):
    TYPE: ClassVar[str] = ExchangeType.USD_SEND
    PRIMARY_TYPE: ClassVar[str] = "HyperliquidTransaction:UsdSend"
    SIGN_TYPES: ClassVar[SignTypes] = (
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "destination", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "time", "type": "uint64"},
    )


@dataclass(frozen=True)
class SpotSendAction(UserSignedAction):
    TYPE: ClassVar[str] = ExchangeType.SPOT_SEND
    PRIMARY_TYPE: ClassVar[str] = "HyperliquidTransaction:SpotSend"
    SIGN_TYPES: ClassVar[SignTypes] = (
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "destination", "type": "string"},
        {"name": "token", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "time", "type": "uint64"},
    )

    token: str = ""

    def _body(self) -> Dict[str, Any]:
        return {"destination": self.destination, "token": self.token, "amount": self.amount}


@dataclass(frozen=True)
class WithdrawAction(UserSignedAction):
    TYPE: ClassVar[str] = ExchangeType.WITHDRAW
    PRIMARY_TYPE: ClassVar[str] = "HyperliquidTransaction:Withdraw"
    SIGN_TYPES: ClassVar[SignTypes] = (
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "destination", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "time", "type": "uint64"},
    )


@dataclass(frozen=True)
class SpotPerpTransferAction(Action):
    """Move USDC between the spot and perp wallets; ``usdc`` in micro-units."""

    TYPE: ClassVar[str] = ExchangeType.SPOT_USER

    usdc: int
    to_perp: bool

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "classTransfer": {"usdc": self.usdc, "toPerp": self.to_perp},
        }


@dataclass(frozen=True)
class ScheduleCancelAction(Action):
    """Dead-man switch. ``time=None`` clears a previously scheduled cancel."""

    TYPE: ClassVar[str] = ExchangeType.SCHEDULE_CANCEL

    time: Optional[int] = None

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {"type": self.TYPE}
        if self.time is not None:
            wire["time"] = self.time
        return wire


@dataclass(frozen=True)
class VaultTransferAction(Action):
    TYPE: ClassVar[str] = ExchangeType.VAULT_TRANSFER

    vault_address: str
    is_deposit: bool
    usd: int

    def to_wire(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE,
            "vaultAddress": self.vault_address,
            "isDeposit": self.is_deposit,
            "usd": self.usd,
        }


@dataclass(frozen=True)
class SetReferrerAction(Action):
    TYPE: ClassVar[str] = ExchangeType.SET_REFERRER

    code: str

    def to_wire(self) -> Dict[str, Any]:
        return {"type": self.TYPE, "code": self.code}


__all__ = [
    "Action",
    "OrderWire",
    "PlaceOrderAction",
    "CancelAction",
    "CancelByCloidAction",
    "ModifyAction",
    "BatchModifyAction",
    "UpdateLeverageAction",
    "UpdateIsolatedMarginAction",
    "UserSignedAction",
    "UsdSendAction",
    "SpotSendAction",
    "WithdrawAction",
    "SpotPerpTransferAction",
    "ScheduleCancelAction",
    "VaultTransferAction",
    "SetReferrerAction",
]
