"""
Account manager module for Hyperliquid client.

Handles leverage and margin adjustments, fund transfers, vault transfers and
referral registration.
"""

from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from exchange_clients.hyperliquid.actions import Action, UserSignedAction
from exchange_clients.hyperliquid.client.utils.converters import ActionBuilder
from exchange_clients.hyperliquid.symbols import AssetIndexResolver

SubmitL1Fn = Callable[[Action, Optional[str]], Awaitable[Dict[str, Any]]]
SubmitUserSignedFn = Callable[[UserSignedAction], Awaitable[Dict[str, Any]]]

Amount = Union[Decimal, int, float, str]


class HyperliquidAccountManager:
    """
    Account manager for Hyperliquid exchange.

    Leverage, margin and internal transfers are L1-signed; USD sends, spot
    sends and withdrawals use the typed-data scheme.
    """

    def __init__(
        self,
        resolver: AssetIndexResolver,
        builder: ActionBuilder,
        submit_l1_fn: SubmitL1Fn,
        submit_user_signed_fn: SubmitUserSignedFn,
        logger: Any,
    ):
        self.resolver = resolver
        self.builder = builder
        self.submit_l1 = submit_l1_fn
        self.submit_user_signed = submit_user_signed_fn
        self.logger = logger

    async def update_leverage(self, symbol: str, leverage_mode: str, leverage: int) -> Dict[str, Any]:
        """
        Set leverage for ``symbol``.

        Args:
            symbol: Perpetual symbol
            leverage_mode: "cross" for cross margin; anything else means isolated
            leverage: Integer leverage
        """
        asset = await self.resolver.resolve(symbol)
        action = self.builder.update_leverage(asset, leverage_mode, leverage)
        self.logger.info(
            f"⚙️ [HYPERLIQUID] Updating leverage: {symbol} -> {leverage}x "
            f"({'cross' if action.is_cross else 'isolated'})"
        )
        return await self.submit_l1(action, None)

    async def update_isolated_margin(self, symbol: str, is_buy: bool, ntli: int) -> Dict[str, Any]:
        """Add (positive ``ntli``) or remove margin on an isolated position."""
        asset = await self.resolver.resolve(symbol)
        action = self.builder.update_isolated_margin(asset, is_buy, ntli)
        self.logger.info(f"⚙️ [HYPERLIQUID] Updating isolated margin: {symbol} ntli={ntli}")
        return await self.submit_l1(action, None)

    async def usd_transfer(self, destination: str, amount: Amount) -> Dict[str, Any]:
        """Send USDC from the perp wallet to another address (no bridge fee)."""
        action = self.builder.usd_send(destination, amount)
        self.logger.info(f"💸 [HYPERLIQUID] USD transfer: {action.amount} -> {destination}")
        return await self.submit_user_signed(action)

    async def spot_transfer(self, destination: str, token: str, amount: Amount) -> Dict[str, Any]:
        """Send a spot token (e.g. ``PURR:0xc1fb...``) to another address."""
        action = self.builder.spot_send(destination, token, amount)
        self.logger.info(f"💸 [HYPERLIQUID] Spot transfer: {action.amount} {token} -> {destination}")
        return await self.submit_user_signed(action)

    async def initiate_withdrawal(self, destination: str, amount: Amount) -> Dict[str, Any]:
        """Withdraw USDC across the bridge (the exchange charges a flat fee)."""
        action = self.builder.withdraw(destination, amount)
        self.logger.info(f"🏦 [HYPERLIQUID] Withdrawal: {action.amount} -> {destination}")
        return await self.submit_user_signed(action)

    async def transfer_between_spot_and_perp(self, usdc: Amount, to_perp: bool) -> Dict[str, Any]:
        """Move USDC between the spot and perp wallets of this account."""
        action = self.builder.spot_perp_transfer(usdc, to_perp)
        self.logger.info(
            f"🔁 [HYPERLIQUID] Class transfer: {usdc} USDC -> {'perp' if to_perp else 'spot'}"
        )
        return await self.submit_l1(action, None)

    async def vault_transfer(self, vault_address: str, is_deposit: bool, usd: int) -> Dict[str, Any]:
        """Deposit into or withdraw from a vault; ``usd`` in micro-units."""
        action = self.builder.vault_transfer(vault_address, is_deposit, usd)
        self.logger.info(
            f"🏛️ [HYPERLIQUID] Vault {'deposit' if is_deposit else 'withdrawal'}: "
            f"{usd} -> {vault_address}"
        )
        return await self.submit_l1(action, None)

    async def set_referrer(self, code: str) -> Dict[str, Any]:
        action = self.builder.set_referrer(code)
        self.logger.info(f"🤝 [HYPERLIQUID] Setting referrer code: {code}")
        return await self.submit_l1(action, None)
