"""Tests for WalletSigner against the real signing primitives."""

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data
from hyperliquid.utils.signing import user_signed_payload

from exchange_clients.base_models import MissingCredentialsError, SigningError
from exchange_clients.hyperliquid.client.utils.converters import ActionBuilder
from exchange_clients.hyperliquid.config import Network
from exchange_clients.hyperliquid.signing import Signer, WalletSigner

# Throwaway key used only by these tests
PRIVATE_KEY = "0x" + "11" * 32
DESTINATION = "0x5e9ee1089755c3435139848e47e6635505d5a13a"
CANCEL_ACTION = {"type": "cancel", "cancels": [{"a": 3, "o": 12345}]}


def _recover_typed(data, signature):
    return Account.recover_message(
        encode_typed_data(full_message=data),
        vrs=(signature["v"], int(signature["r"], 16), int(signature["s"], 16)),
    )


@pytest.fixture
def wallet_signer():
    return WalletSigner(PRIVATE_KEY, Network.MAINNET)


def test_address_matches_key(wallet_signer):
    assert isinstance(wallet_signer, Signer)
    assert wallet_signer.address == Account.from_key(PRIVATE_KEY).address


@pytest.mark.parametrize("key", [None, "", "your_private_key_here"])
def test_missing_key_rejected(key):
    with pytest.raises(MissingCredentialsError):
        WalletSigner(key)


def test_malformed_key_rejected():
    with pytest.raises(SigningError, match="Invalid private key"):
        WalletSigner("0x1234")


@pytest.mark.asyncio
async def test_l1_signature_is_deterministic(wallet_signer):
    first = await wallet_signer.sign_l1(CANCEL_ACTION, None, 1_700_000_000_000)
    second = await wallet_signer.sign_l1(dict(CANCEL_ACTION), None, 1_700_000_000_000)

    assert set(first) == {"r", "s", "v"}
    assert first == second


@pytest.mark.asyncio
async def test_l1_signature_binds_nonce_vault_and_network(wallet_signer):
    base = await wallet_signer.sign_l1(CANCEL_ACTION, None, 1_700_000_000_000)
    other_nonce = await wallet_signer.sign_l1(CANCEL_ACTION, None, 1_700_000_000_001)
    with_vault = await wallet_signer.sign_l1(
        CANCEL_ACTION, "0x1719884eb866cb12b2287399b15f7db5e7d775ea", 1_700_000_000_000
    )
    testnet = await WalletSigner(PRIVATE_KEY, Network.TESTNET).sign_l1(CANCEL_ACTION, None, 1_700_000_000_000)

    assert len({str(sig) for sig in (base, other_nonce, with_vault, testnet)}) == 4


@pytest.mark.asyncio
async def test_unserializable_action_raises_signing_error(wallet_signer):
    with pytest.raises(SigningError, match="cancel") as exc_info:
        await wallet_signer.sign_l1({"type": "cancel", "cancels": [object()]}, None, 1)

    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_typed_signature_recovers_to_signer(wallet_signer):
    action = ActionBuilder(Network.MAINNET).usd_send(DESTINATION, "100", time=1_700_000_000_000)
    fields = action.to_wire()

    signature = await wallet_signer.sign_typed(fields, action.PRIMARY_TYPE, action.sign_types())

    data = user_signed_payload(action.PRIMARY_TYPE, action.sign_types(), fields)
    assert data["domain"]["chainId"] == 0xA4B1
    assert _recover_typed(data, signature) == wallet_signer.address


@pytest.mark.asyncio
async def test_typed_signing_does_not_mutate_fields(wallet_signer):
    action = ActionBuilder(Network.TESTNET).withdraw(DESTINATION, "5", time=42)
    fields = action.to_wire()
    snapshot = dict(fields)

    await wallet_signer.sign_typed(fields, action.PRIMARY_TYPE, action.sign_types())

    assert fields == snapshot


@pytest.mark.asyncio
async def test_typed_signing_failure_is_wrapped(wallet_signer):
    # signatureChainId is required to build the signing domain
    with pytest.raises(SigningError, match="HyperliquidTransaction:UsdSend"):
        await wallet_signer.sign_typed(
            {"destination": DESTINATION, "amount": "1", "time": 1},
            "HyperliquidTransaction:UsdSend",
            [{"name": "destination", "type": "string"}],
        )
