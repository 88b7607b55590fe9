"""
Converters for Hyperliquid client.

Order wire encoding and the action builder that maps each operation kind to
its wire variant.
"""

from typing import Any, Callable, Dict, Optional, Sequence, Union

from exchange_clients.base_models import InvalidOrderError
from exchange_clients.hyperliquid.actions import (
    Action,
    BatchModifyAction,
    CancelAction,
    CancelByCloidAction,
    ModifyAction,
    OrderWire,
    PlaceOrderAction,
    ScheduleCancelAction,
    SetReferrerAction,
    SpotPerpTransferAction,
    SpotSendAction,
    UpdateIsolatedMarginAction,
    UpdateLeverageAction,
    UsdSendAction,
    VaultTransferAction,
    WithdrawAction,
)
from exchange_clients.hyperliquid.common import (
    DEFAULT_ORDER_GROUPING,
    DEFAULT_SIGNATURE_CHAIN_ID,
    ExchangeType,
    amount_to_wire,
    decimal_to_wire,
    to_usd_micro_units,
    validate_cloid,
)
from exchange_clients.hyperliquid.config import Network
from exchange_clients.hyperliquid.models import (
    CancelByCloidRequest,
    CancelRequest,
    LimitOrderType,
    ModifyRequest,
    OrderRequest,
    OrderType,
    TriggerOrderType,
)


def order_type_to_wire(order_type: OrderType) -> Dict[str, Any]:
    """Encode a limit or trigger order type."""
    if isinstance(order_type, LimitOrderType):
        return {"limit": {"tif": order_type.tif}}
    if isinstance(order_type, TriggerOrderType):
        return {
            "trigger": {
                "isMarket": order_type.is_market,
                "triggerPx": decimal_to_wire(order_type.trigger_px, "trigger_px"),
                "tpsl": order_type.tpsl,
            }
        }
    raise InvalidOrderError(f"Invalid order type: {order_type!r}")


def order_request_to_order_wire(order: OrderRequest, asset: int) -> OrderWire:
    """
    Convert an OrderRequest into its wire form with ``coin`` replaced by ``asset``.

    Args:
        order: Order intent
        asset: Resolved asset index for ``order.coin``

    Returns:
        ``{a, b, p, s, r, t[, c]}`` dict
    """
    if isinstance(asset, bool) or not isinstance(asset, int) or asset < 0:
        raise InvalidOrderError(f"Asset index must be a non-negative integer, got {asset!r}")

    order_wire: OrderWire = {
        "a": asset,
        "b": order.is_buy,
        "p": decimal_to_wire(order.price, "price"),
        "s": decimal_to_wire(order.size, "size"),
        "r": bool(order.reduce_only),
        "t": order_type_to_wire(order.order_type),
    }
    cloid = validate_cloid(order.cloid)
    if cloid is not None:
        order_wire["c"] = cloid
    return order_wire


def _ensure_same_length(kind: str, items: Sequence[Any], indices: Sequence[int]) -> None:
    if len(items) != len(indices):
        raise ValueError(
            f"{kind}: got {len(items)} requests but {len(indices)} resolved asset indices"
        )


class ActionBuilder:
    """
    Pure mapping from (operation kind, typed input, resolved indices) to an Action.

    The only implicit inputs are the configured network (chain tag) and the
    signature chain id; both are fixed at construction.
    """

    def __init__(
        self,
        network: Network = Network.MAINNET,
        signature_chain_id: str = DEFAULT_SIGNATURE_CHAIN_ID,
    ):
        self.network = Network(network)
        self.signature_chain_id = signature_chain_id
        self._builders: Dict[str, Callable[..., Action]] = {
            ExchangeType.ORDER: self.place_order,
            ExchangeType.CANCEL: self.cancel,
            ExchangeType.CANCEL_BY_CLOID: self.cancel_by_cloid,
            ExchangeType.MODIFY: self.modify,
            ExchangeType.BATCH_MODIFY: self.batch_modify,
            ExchangeType.UPDATE_LEVERAGE: self.update_leverage,
            ExchangeType.UPDATE_ISOLATED_MARGIN: self.update_isolated_margin,
            ExchangeType.USD_SEND: self.usd_send,
            ExchangeType.SPOT_SEND: self.spot_send,
            ExchangeType.WITHDRAW: self.withdraw,
            ExchangeType.SPOT_USER: self.spot_perp_transfer,
            ExchangeType.SCHEDULE_CANCEL: self.schedule_cancel,
            ExchangeType.VAULT_TRANSFER: self.vault_transfer,
            ExchangeType.SET_REFERRER: self.set_referrer,
        }

    @property
    def hyperliquid_chain(self) -> str:
        return self.network.chain_name

    def build(self, kind: str, *args: Any, **kwargs: Any) -> Action:
        """
        Dispatch to the builder for ``kind`` (an ``ExchangeType`` tag).

        Example:
            >>> builder.build(ExchangeType.CANCEL, [CancelRequest("BTC", 7)], [0])
        """
        try:
            builder = self._builders[kind]
        except KeyError:
            raise ValueError(f"Unsupported action kind: {kind}") from None
        return builder(*args, **kwargs)

    # ------------------------------------------------------------------
    # Order actions (asset-indexed)
    # ------------------------------------------------------------------

    def place_order(
        self,
        orders: Sequence[OrderRequest],
        indices: Sequence[int],
        grouping: str = DEFAULT_ORDER_GROUPING,
    ) -> PlaceOrderAction:
        _ensure_same_length(ExchangeType.ORDER, orders, indices)
        wires = tuple(
            order_request_to_order_wire(order, asset) for order, asset in zip(orders, indices)
        )
        return PlaceOrderAction(orders=wires, grouping=grouping)

    def cancel(self, cancels: Sequence[CancelRequest], indices: Sequence[int]) -> CancelAction:
        _ensure_same_length(ExchangeType.CANCEL, cancels, indices)
        return CancelAction(
            cancels=tuple((asset, int(req.oid)) for req, asset in zip(cancels, indices))
        )

    def cancel_by_cloid(
        self,
        cancels: Sequence[CancelByCloidRequest],
        indices: Sequence[int],
    ) -> CancelByCloidAction:
        _ensure_same_length(ExchangeType.CANCEL_BY_CLOID, cancels, indices)
        return CancelByCloidAction(
            cancels=tuple(
                (asset, validate_cloid(req.cloid)) for req, asset in zip(cancels, indices)
            )
        )

    def modify(self, oid: Union[int, str], order: OrderRequest, asset: int) -> ModifyAction:
        return ModifyAction(oid=oid, order=order_request_to_order_wire(order, asset))

    def batch_modify(
        self,
        modifies: Sequence[ModifyRequest],
        indices: Sequence[int],
    ) -> BatchModifyAction:
        _ensure_same_length(ExchangeType.BATCH_MODIFY, modifies, indices)
        return BatchModifyAction(
            modifies=tuple(
                (m.oid, order_request_to_order_wire(m.order, asset))
                for m, asset in zip(modifies, indices)
            )
        )

    def update_leverage(self, asset: int, leverage_mode: str, leverage: int) -> UpdateLeverageAction:
        """Anything other than ``"cross"`` means isolated."""
        return UpdateLeverageAction(
            asset=asset,
            is_cross=leverage_mode == "cross",
            leverage=int(leverage),
        )

    def update_isolated_margin(self, asset: int, is_buy: bool, ntli: int) -> UpdateIsolatedMarginAction:
        return UpdateIsolatedMarginAction(asset=asset, is_buy=bool(is_buy), ntli=int(ntli))

    # ------------------------------------------------------------------
    # Transfer-class actions (typed-data signed). The client stamps
    # ``time`` with the request nonce at submission.
    # ------------------------------------------------------------------

    def usd_send(self, destination: str, amount: Any, time: int = 0) -> UsdSendAction:
        return UsdSendAction(
            hyperliquid_chain=self.hyperliquid_chain,
            signature_chain_id=self.signature_chain_id,
            destination=destination,
            amount=amount_to_wire(amount),
            time=time,
        )

    def spot_send(self, destination: str, token: str, amount: Any, time: int = 0) -> SpotSendAction:
        return SpotSendAction(
            hyperliquid_chain=self.hyperliquid_chain,
            signature_chain_id=self.signature_chain_id,
            destination=destination,
            token=token,
            amount=amount_to_wire(amount),
            time=time,
        )

    def withdraw(self, destination: str, amount: Any, time: int = 0) -> WithdrawAction:
        return WithdrawAction(
            hyperliquid_chain=self.hyperliquid_chain,
            signature_chain_id=self.signature_chain_id,
            destination=destination,
            amount=amount_to_wire(amount),
            time=time,
        )

    # ------------------------------------------------------------------
    # Account actions
    # ------------------------------------------------------------------

    def spot_perp_transfer(self, usdc: Any, to_perp: bool) -> SpotPerpTransferAction:
        return SpotPerpTransferAction(usdc=to_usd_micro_units(usdc), to_perp=bool(to_perp))

    def schedule_cancel(self, time: Optional[int] = None) -> ScheduleCancelAction:
        return ScheduleCancelAction(time=None if time is None else int(time))

    def vault_transfer(self, vault_address: str, is_deposit: bool, usd: int) -> VaultTransferAction:
        return VaultTransferAction(vault_address=vault_address, is_deposit=bool(is_deposit), usd=int(usd))

    def set_referrer(self, code: str) -> SetReferrerAction:
        return SetReferrerAction(code=code)
