"""Fixtures for the Hyperliquid client tests."""

import pytest

from exchange_clients.hyperliquid.client import HyperliquidClient
from exchange_clients.hyperliquid.client.utils.nonce import NonceGenerator
from exchange_clients.hyperliquid.config import Network
from exchange_clients.hyperliquid.symbols import StaticSymbolDirectory

from hl_fakes import ASSETS, FIXED_NOW_MS, RecordingSigner, RecordingTransport


@pytest.fixture
def signer():
    return RecordingSigner()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def directory():
    return StaticSymbolDirectory(ASSETS)


@pytest.fixture
def nonce_generator():
    return NonceGenerator(clock=lambda: FIXED_NOW_MS)


@pytest.fixture
def client(signer, transport, directory, nonce_generator):
    return HyperliquidClient(
        signer,
        transport,
        directory,
        network=Network.MAINNET,
        nonce_generator=nonce_generator,
    )
