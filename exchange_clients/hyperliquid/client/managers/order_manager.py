"""
Order manager module for Hyperliquid client.

Handles order placement, cancellation and modification. Every operation
resolves its symbols, builds the complete action and only then hands it to
the client's L1 submit function (one nonce, one signature, one request).
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Union

from exchange_clients.hyperliquid.actions import Action
from exchange_clients.hyperliquid.client.utils.converters import ActionBuilder
from exchange_clients.hyperliquid.common import DEFAULT_ORDER_GROUPING
from exchange_clients.hyperliquid.models import (
    CancelByCloidRequest,
    CancelRequest,
    ModifyRequest,
    OrderRequest,
)
from exchange_clients.hyperliquid.symbols import AssetIndexResolver

SubmitL1Fn = Callable[[Action, Optional[str]], Awaitable[Dict[str, Any]]]


class HyperliquidOrderManager:
    """
    Order manager for Hyperliquid exchange.

    Handles:
    - Order placement (single and bulk, optionally through a vault)
    - Cancellation by order id or client order id
    - Single and batch modification
    - Scheduled cancel (dead-man switch)
    """

    def __init__(
        self,
        resolver: AssetIndexResolver,
        builder: ActionBuilder,
        submit_l1_fn: SubmitL1Fn,
        logger: Any,
        default_vault_address: Optional[str] = None,
    ):
        """
        Initialize order manager.

        Args:
            resolver: Symbol to asset index resolver
            builder: Action builder for the configured network
            submit_l1_fn: Client function that signs (L1) and dispatches an action
            logger: Logger instance
            default_vault_address: Vault used for placement when the call names none
        """
        self.resolver = resolver
        self.builder = builder
        self.submit_l1 = submit_l1_fn
        self.logger = logger
        self.default_vault_address = default_vault_address

    async def place_order(
        self,
        order: OrderRequest,
        vault_address: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Place a single order."""
        return await self.place_orders([order], vault_address=vault_address)

    async def place_orders(
        self,
        orders: Sequence[OrderRequest],
        vault_address: Optional[str] = None,
        grouping: str = DEFAULT_ORDER_GROUPING,
    ) -> Dict[str, Any]:
        """
        Place several orders in one signed action.

        Args:
            orders: Order intents, kept in the given order
            vault_address: Route through this vault (defaults to the configured vault)
            grouping: Order grouping ("na", "normalTpsl", "positionTpsl")
        """
        orders = list(orders)
        indices = await self.resolver.resolve_many(order.coin for order in orders)
        action = self.builder.place_order(orders, indices, grouping=grouping)

        vault = vault_address or self.default_vault_address
        for order, asset in zip(orders, indices):
            self.logger.info(
                f"📤 [HYPERLIQUID] Submitting order: coin={order.coin} asset={asset} "
                f"side={order.side.upper()} price={order.price} size={order.size} "
                f"reduce_only={order.reduce_only}"
                + (f" vault={vault}" if vault else "")
            )
        return await self.submit_l1(action, vault)

    async def cancel_order(
        self,
        cancel_requests: Union[CancelRequest, Sequence[CancelRequest]],
    ) -> Dict[str, Any]:
        """Cancel one or more orders by exchange order id."""
        if isinstance(cancel_requests, CancelRequest):
            cancels = [cancel_requests]
        else:
            cancels = list(cancel_requests)

        indices = await self.resolver.resolve_many(req.coin for req in cancels)
        action = self.builder.cancel(cancels, indices)
        self.logger.info(
            f"🗑️ [HYPERLIQUID] Cancelling {len(cancels)} order(s): "
            + ", ".join(f"{req.coin}#{req.oid}" for req in cancels)
        )
        return await self.submit_l1(action, None)

    async def cancel_order_by_cloid(self, symbol: str, cloid: str) -> Dict[str, Any]:
        """Cancel a single order by client order id."""
        return await self.cancel_orders_by_cloid([CancelByCloidRequest(coin=symbol, cloid=cloid)])

    async def cancel_orders_by_cloid(self, cancels: Sequence[CancelByCloidRequest]) -> Dict[str, Any]:
        cancels = list(cancels)
        indices = await self.resolver.resolve_many(req.coin for req in cancels)
        action = self.builder.cancel_by_cloid(cancels, indices)
        self.logger.info(
            f"🗑️ [HYPERLIQUID] Cancelling {len(cancels)} order(s) by cloid: "
            + ", ".join(f"{req.coin}:{req.cloid}" for req in cancels)
        )
        return await self.submit_l1(action, None)

    async def modify_order(self, oid: Union[int, str], order: OrderRequest) -> Dict[str, Any]:
        """Replace order ``oid`` (exchange id or cloid) with ``order``."""
        asset = await self.resolver.resolve(order.coin)
        action = self.builder.modify(oid, order, asset)
        self.logger.info(
            f"✏️ [HYPERLIQUID] Modifying order {oid}: coin={order.coin} "
            f"price={order.price} size={order.size}"
        )
        return await self.submit_l1(action, None)

    async def batch_modify_orders(self, modifies: Sequence[ModifyRequest]) -> Dict[str, Any]:
        """Modify several orders in one signed action, preserving input order."""
        modifies = list(modifies)
        indices = await self.resolver.resolve_many(m.order.coin for m in modifies)
        action = self.builder.batch_modify(modifies, indices)
        self.logger.info(f"✏️ [HYPERLIQUID] Batch modifying {len(modifies)} order(s)")
        return await self.submit_l1(action, None)

    async def schedule_cancel(self, time: Optional[int] = None) -> Dict[str, Any]:
        """
        Cancel all open orders at ``time`` (ms). ``None`` clears the schedule.

        Only available to accounts above the exchange's volume threshold.
        """
        action = self.builder.schedule_cancel(time)
        self.logger.info(
            f"⏰ [HYPERLIQUID] Scheduling cancel-all at {time}" if time is not None
            else "⏰ [HYPERLIQUID] Clearing scheduled cancel"
        )
        return await self.submit_l1(action, None)
