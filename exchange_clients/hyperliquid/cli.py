"""
Command-line entry point for one-off Hyperliquid actions.

Usage:
    hl-exchange [--env-file .env] [--network testnet] order BTC buy 50000 0.1 --tif Alo
    hl-exchange cancel BTC 123456
    hl-exchange usd-transfer 0xabc... 100

Credentials come from HYPERLIQUID_* variables (see HyperliquidSettings).
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, List, Optional

import dotenv

from exchange_clients.base_models import ExchangeClientError
from exchange_clients.factory import ExchangeFactory
from exchange_clients.hyperliquid.config import HyperliquidSettings
from exchange_clients.hyperliquid.models import CancelRequest, LimitOrderType, OrderRequest
from helpers.unified_logger import get_core_logger
from networking.exceptions import TransportError


def _str_to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "y"):
        return True
    if lowered in ("0", "false", "no", "n"):
        return False
    raise argparse.ArgumentTypeError(f"Expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hl-exchange",
        description="Sign and send a single Hyperliquid exchange action.",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Path to the environment file with HYPERLIQUID_* credentials (default: .env).",
    )
    parser.add_argument(
        "--network",
        choices=["mainnet", "testnet"],
        default=None,
        help="Override HYPERLIQUID_NETWORK.",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    order = sub.add_parser("order", help="Place a limit order")
    order.add_argument("coin")
    order.add_argument("side", choices=["buy", "sell"])
    order.add_argument("price")
    order.add_argument("size")
    order.add_argument("--tif", choices=["Gtc", "Ioc", "Alo"], default="Gtc")
    order.add_argument("--reduce-only", action="store_true")
    order.add_argument("--cloid", default=None)
    order.add_argument("--vault", default=None, help="Place the order on behalf of this vault")

    cancel = sub.add_parser("cancel", help="Cancel an order by exchange order id")
    cancel.add_argument("coin")
    cancel.add_argument("oid", type=int)

    cancel_cloid = sub.add_parser("cancel-cloid", help="Cancel an order by client order id")
    cancel_cloid.add_argument("coin")
    cancel_cloid.add_argument("cloid")

    leverage = sub.add_parser("leverage", help="Update leverage")
    leverage.add_argument("coin")
    leverage.add_argument("mode", choices=["cross", "isolated"])
    leverage.add_argument("leverage", type=int)

    usd = sub.add_parser("usd-transfer", help="Send USDC to another address")
    usd.add_argument("destination")
    usd.add_argument("amount")

    spot = sub.add_parser("spot-transfer", help="Send a spot token to another address")
    spot.add_argument("destination")
    spot.add_argument("token")
    spot.add_argument("amount")

    withdraw = sub.add_parser("withdraw", help="Withdraw USDC across the bridge")
    withdraw.add_argument("destination")
    withdraw.add_argument("amount")

    class_transfer = sub.add_parser("class-transfer", help="Move USDC between spot and perp")
    class_transfer.add_argument("usdc")
    class_transfer.add_argument("to_perp", type=_str_to_bool)

    schedule = sub.add_parser("schedule-cancel", help="Schedule (or clear) a cancel-all")
    schedule.add_argument("time", type=int, nargs="?", default=None)

    referrer = sub.add_parser("set-referrer", help="Register a referral code")
    referrer.add_argument("code")

    return parser


async def run_command(client: Any, args: argparse.Namespace) -> Dict[str, Any]:
    """Dispatch parsed arguments to the matching client operation."""
    command = args.command
    if command == "order":
        order = OrderRequest(
            coin=args.coin,
            side=args.side,
            price=args.price,
            size=args.size,
            order_type=LimitOrderType(args.tif),
            reduce_only=args.reduce_only,
            cloid=args.cloid,
        )
        return await client.place_order(order, vault_address=args.vault)
    if command == "cancel":
        return await client.cancel_order(CancelRequest(coin=args.coin, oid=args.oid))
    if command == "cancel-cloid":
        return await client.cancel_order_by_cloid(args.coin, args.cloid)
    if command == "leverage":
        return await client.update_leverage(args.coin, args.mode, args.leverage)
    if command == "usd-transfer":
        return await client.usd_transfer(args.destination, args.amount)
    if command == "spot-transfer":
        return await client.spot_transfer(args.destination, args.token, args.amount)
    if command == "withdraw":
        return await client.initiate_withdrawal(args.destination, args.amount)
    if command == "class-transfer":
        return await client.transfer_between_spot_and_perp(args.usdc, args.to_perp)
    if command == "schedule-cancel":
        return await client.schedule_cancel(args.time)
    if command == "set-referrer":
        return await client.set_referrer(args.code)
    raise ValueError(f"Unknown command: {command}")


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    dotenv.load_dotenv(args.env_file)
    os.environ["LOG_LEVEL"] = args.log_level
    logger = get_core_logger("cli")

    overrides: Dict[str, Any] = {"log_level": args.log_level}
    if args.network:
        overrides["network"] = args.network
    settings = HyperliquidSettings(**overrides)

    try:
        client = ExchangeFactory.create_exchange("hyperliquid", settings)
    except ExchangeClientError as exc:
        logger.error(f"Failed to create client: {exc}")
        return 2

    try:
        async with client:
            response = await run_command(client, args)
    except (ExchangeClientError, TransportError) as exc:
        logger.error(f"{args.command} failed: {type(exc).__name__}: {exc}")
        return 1

    print(json.dumps(response, indent=2))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
