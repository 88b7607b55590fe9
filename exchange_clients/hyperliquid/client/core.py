"""
Hyperliquid exchange client implementation for trade execution.
"""

import dataclasses
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Union

from exchange_clients.hyperliquid.actions import Action, UserSignedAction
from exchange_clients.hyperliquid.common import DEFAULT_REQUEST_WEIGHT, DEFAULT_SIGNATURE_CHAIN_ID
from exchange_clients.hyperliquid.config import HyperliquidSettings, Network
from exchange_clients.hyperliquid.models import (
    CancelByCloidRequest,
    CancelRequest,
    ModifyRequest,
    OrderRequest,
)
from exchange_clients.hyperliquid.payload import PayloadAssembler, SignedPayload
from exchange_clients.hyperliquid.signing import Signer, WalletSigner
from exchange_clients.hyperliquid.symbols import (
    AssetIndexResolver,
    MetaSymbolDirectory,
    SymbolDirectory,
)
from exchange_clients.hyperliquid.transport import HttpRequestTransport, RequestTransport
from helpers.unified_logger import get_exchange_logger
from networking.rate_limiter import WeightRateLimiter

from .managers.account_manager import HyperliquidAccountManager
from .managers.order_manager import HyperliquidOrderManager
from .utils.converters import ActionBuilder
from .utils.nonce import NonceGenerator

Amount = Union[Decimal, int, float, str]


class HyperliquidClient:
    """
    Authenticated Hyperliquid trade-execution client.

    Each call runs resolve -> build -> nonce -> sign -> assemble -> send.
    Resolution and building complete before a nonce is drawn or anything is
    signed, so a bad symbol or parameter never produces a signature or a
    request. Errors from the signer and the transport propagate unchanged.
    """

    def __init__(
        self,
        signer: Signer,
        transport: RequestTransport,
        directory: Optional[SymbolDirectory] = None,
        *,
        resolver: Optional[AssetIndexResolver] = None,
        network: Network = Network.MAINNET,
        signature_chain_id: str = DEFAULT_SIGNATURE_CHAIN_ID,
        nonce_generator: Optional[NonceGenerator] = None,
        default_vault_address: Optional[str] = None,
        logger: Any = None,
    ):
        """
        Initialize Hyperliquid client.

        Args:
            signer: Signer for the L1 and typed-data schemes
            transport: Delivers signed payloads
            directory: Symbol directory (ignored when ``resolver`` is given)
            resolver: Pre-built asset index resolver
            network: Target network; decides the signed chain tag and must match the signer's
            signature_chain_id: Chain id signed into transfer-class actions
            nonce_generator: Shared generator for this wallet (a new one by default)
            default_vault_address: Vault used for order placement when a call names none
            logger: Optional logger
        """
        if resolver is None and directory is None:
            raise ValueError("Either a symbol directory or a resolver is required")

        self.network = Network(network)
        signer_network = getattr(signer, "network", self.network)
        if Network(signer_network) is not self.network:
            raise ValueError(
                f"Signer is configured for {Network(signer_network).value} but client targets {self.network.value}"
            )

        self.logger = logger or get_exchange_logger("hyperliquid", self.network.value)
        self.signer = signer
        self.transport = transport
        self.directory = directory if resolver is None else resolver.directory
        self.resolver = resolver or AssetIndexResolver(directory, logger=self.logger)
        self.nonce_generator = nonce_generator or NonceGenerator()
        self.builder = ActionBuilder(self.network, signature_chain_id)
        self.payload_assembler = PayloadAssembler()

        self.order_manager = HyperliquidOrderManager(
            resolver=self.resolver,
            builder=self.builder,
            submit_l1_fn=self._submit_l1,
            logger=self.logger,
            default_vault_address=default_vault_address,
        )
        self.account_manager = HyperliquidAccountManager(
            resolver=self.resolver,
            builder=self.builder,
            submit_l1_fn=self._submit_l1,
            submit_user_signed_fn=self._submit_user_signed,
            logger=self.logger,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[HyperliquidSettings] = None,
        nonce_generator: Optional[NonceGenerator] = None,
    ) -> "HyperliquidClient":
        """Build a client with a wallet signer, HTTP transport and meta-backed directory."""
        settings = settings or HyperliquidSettings()
        logger = get_exchange_logger("hyperliquid", settings.network.value, log_level=settings.log_level)

        signer = WalletSigner(settings.private_key, settings.network)
        transport = HttpRequestTransport(
            settings.api_url,
            rate_limiter=WeightRateLimiter(settings.rate_limit_weight_per_minute, 60.0),
            timeout=settings.request_timeout_seconds,
            max_attempts=settings.max_attempts,
            proxy_url=settings.proxy_url,
            logger=logger,
        )
        directory = MetaSymbolDirectory(transport, logger=logger)
        return cls(
            signer,
            transport,
            directory,
            network=settings.network,
            signature_chain_id=settings.signature_chain_id,
            nonce_generator=nonce_generator,
            default_vault_address=settings.vault_address,
            logger=logger,
        )

    def get_exchange_name(self) -> str:
        return "hyperliquid"

    # ========================================================================
    # CONNECTION MANAGEMENT
    # ========================================================================

    async def connect(self) -> None:
        """Preload the symbol universe when the directory supports it."""
        refresh = getattr(self.directory, "refresh", None)
        if refresh is not None:
            await refresh()
        self.logger.info(f"✅ [HYPERLIQUID] Client ready on {self.network.value}")

    async def disconnect(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "HyperliquidClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    # ========================================================================
    # SIGN AND DISPATCH PIPELINE
    # ========================================================================

    async def _submit_l1(self, action: Action, vault_address: Optional[str] = None) -> Dict[str, Any]:
        """Sign a fully built action with the L1 scheme and send it."""
        wire = action.to_wire()
        nonce = self.nonce_generator.next()
        signature = await self.signer.sign_l1(wire, vault_address, nonce)
        payload = self.payload_assembler.assemble(wire, nonce, signature, vault_address)
        return await self._dispatch(payload)

    async def _submit_user_signed(self, action: UserSignedAction) -> Dict[str, Any]:
        """
        Stamp a transfer-class action with the nonce, sign it with its typed
        schema and send it. The payload nonce equals the signed ``time``.
        """
        nonce = self.nonce_generator.next()
        action = dataclasses.replace(action, time=nonce)
        wire = action.to_wire()
        signature = await self.signer.sign_typed(wire, action.PRIMARY_TYPE, action.sign_types())
        payload = self.payload_assembler.assemble(wire, action.time, signature)
        return await self._dispatch(payload)

    async def _dispatch(self, payload: SignedPayload) -> Dict[str, Any]:
        action_type = payload.action.get("type")
        self.logger.debug(f"[HYPERLIQUID] Sending {action_type} nonce={payload.nonce}")
        try:
            return await self.transport.send(payload.to_dict(), DEFAULT_REQUEST_WEIGHT)
        except Exception as exc:
            self.logger.error(f"❌ [HYPERLIQUID] {action_type} failed: {type(exc).__name__}: {exc}")
            raise

    # ========================================================================
    # ORDER MANAGEMENT
    # ========================================================================

    async def place_order(self, order: OrderRequest, vault_address: Optional[str] = None) -> Dict[str, Any]:
        return await self.order_manager.place_order(order, vault_address=vault_address)

    async def place_orders(
        self,
        orders: Sequence[OrderRequest],
        vault_address: Optional[str] = None,
        grouping: str = "na",
    ) -> Dict[str, Any]:
        return await self.order_manager.place_orders(orders, vault_address=vault_address, grouping=grouping)

    async def cancel_order(
        self,
        cancel_requests: Union[CancelRequest, Sequence[CancelRequest]],
    ) -> Dict[str, Any]:
        return await self.order_manager.cancel_order(cancel_requests)

    async def cancel_order_by_cloid(self, symbol: str, cloid: str) -> Dict[str, Any]:
        return await self.order_manager.cancel_order_by_cloid(symbol, cloid)

    async def cancel_orders_by_cloid(self, cancels: Sequence[CancelByCloidRequest]) -> Dict[str, Any]:
        return await self.order_manager.cancel_orders_by_cloid(cancels)

    async def modify_order(self, oid: Union[int, str], order: OrderRequest) -> Dict[str, Any]:
        return await self.order_manager.modify_order(oid, order)

    async def batch_modify_orders(self, modifies: Sequence[ModifyRequest]) -> Dict[str, Any]:
        return await self.order_manager.batch_modify_orders(modifies)

    async def schedule_cancel(self, time: Optional[int] = None) -> Dict[str, Any]:
        return await self.order_manager.schedule_cancel(time)

    # ========================================================================
    # ACCOUNT MANAGEMENT
    # ========================================================================

    async def update_leverage(self, symbol: str, leverage_mode: str, leverage: int) -> Dict[str, Any]:
        return await self.account_manager.update_leverage(symbol, leverage_mode, leverage)

    async def update_isolated_margin(self, symbol: str, is_buy: bool, ntli: int) -> Dict[str, Any]:
        return await self.account_manager.update_isolated_margin(symbol, is_buy, ntli)

    async def usd_transfer(self, destination: str, amount: Amount) -> Dict[str, Any]:
        return await self.account_manager.usd_transfer(destination, amount)

    async def spot_transfer(self, destination: str, token: str, amount: Amount) -> Dict[str, Any]:
        return await self.account_manager.spot_transfer(destination, token, amount)

    async def initiate_withdrawal(self, destination: str, amount: Amount) -> Dict[str, Any]:
        return await self.account_manager.initiate_withdrawal(destination, amount)

    async def transfer_between_spot_and_perp(self, usdc: Amount, to_perp: bool) -> Dict[str, Any]:
        return await self.account_manager.transfer_between_spot_and_perp(usdc, to_perp)

    async def vault_transfer(self, vault_address: str, is_deposit: bool, usd: int) -> Dict[str, Any]:
        return await self.account_manager.vault_transfer(vault_address, is_deposit, usd)

    async def set_referrer(self, code: str) -> Dict[str, Any]:
        return await self.account_manager.set_referrer(code)
