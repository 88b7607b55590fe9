"""Fakes shared by the Hyperliquid client tests."""

import asyncio
import copy
from typing import Any, Dict, List, Optional

FIXED_NOW_MS = 1_700_000_000_000

TEST_SIGNATURE = {"r": "0x01", "s": "0x02", "v": 27}

ASSETS = {"BTC": 3, "ETH": 1, "SOL": 5, "PURR/USDC": 10000}


class RecordingSigner:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.l1_calls: List[Dict[str, Any]] = []
        self.typed_calls: List[Dict[str, Any]] = []

    async def sign_l1(self, action, vault_address, nonce):
        if self.error is not None:
            raise self.error
        self.l1_calls.append(
            {"action": copy.deepcopy(action), "vault_address": vault_address, "nonce": nonce}
        )
        return dict(TEST_SIGNATURE)

    async def sign_typed(self, fields, primary_type, field_types):
        if self.error is not None:
            raise self.error
        self.typed_calls.append(
            {
                "fields": copy.deepcopy(fields),
                "primary_type": primary_type,
                "field_types": copy.deepcopy(field_types),
            }
        )
        return dict(TEST_SIGNATURE)

    @property
    def total_calls(self) -> int:
        return len(self.l1_calls) + len(self.typed_calls)


class RecordingTransport:
    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.response = response if response is not None else {"status": "ok", "response": {"type": "default"}}
        self.error = error
        self.sent: List[Dict[str, Any]] = []
        self.weights: List[int] = []
        self.info_requests: List[Dict[str, Any]] = []

    async def send(self, payload, weight=1):
        self.sent.append(copy.deepcopy(payload))
        self.weights.append(weight)
        if self.error is not None:
            raise self.error
        return self.response

    async def post_info(self, body, weight=1):
        self.info_requests.append(body)
        return {}


class DelayedDirectory:
    """Directory whose lookups finish after per-symbol delays."""

    def __init__(self, mapping: Dict[str, int], delays: Dict[str, float]):
        self.mapping = mapping
        self.delays = delays
        self.lookups: List[str] = []

    async def get_asset_index(self, symbol: str) -> Optional[int]:
        self.lookups.append(symbol)
        await asyncio.sleep(self.delays.get(symbol, 0))
        return self.mapping.get(symbol)

