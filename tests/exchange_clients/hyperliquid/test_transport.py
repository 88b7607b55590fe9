"""Tests for the Hyperliquid HTTP transport using httpx.MockTransport."""

import json

import httpx
import pytest

from exchange_clients.hyperliquid.transport import HttpRequestTransport, RequestTransport
from networking.exceptions import RateLimitError, RemoteRejectionError, TransportError

BASE_URL = "https://api.hyperliquid-testnet.xyz"
PAYLOAD = {"action": {"type": "cancel", "cancels": []}, "nonce": 1, "signature": {"r": "0x1", "s": "0x2", "v": 27}}


class RecordingLimiter:
    def __init__(self):
        self.weights = []

    async def acquire(self, weight=1):
        self.weights.append(weight)


def build_transport(responses, max_attempts=3, rate_limiter=None):
    """Transport whose HTTP client replays ``responses`` (Response or Exception) in order."""
    requests = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    http_client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    transport = HttpRequestTransport(
        BASE_URL,
        rate_limiter=rate_limiter,
        max_attempts=max_attempts,
        backoff_min=0,
        backoff_max=0,
        http_client=http_client,
    )
    return transport, requests


@pytest.mark.asyncio
async def test_send_posts_json_to_exchange_endpoint():
    limiter = RecordingLimiter()
    transport, requests = build_transport(
        [httpx.Response(200, json={"status": "ok", "response": {"type": "cancel"}})],
        rate_limiter=limiter,
    )

    async with transport:
        result = await transport.send(PAYLOAD)

    assert isinstance(transport, RequestTransport)
    assert result == {"status": "ok", "response": {"type": "cancel"}}
    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/exchange"
    assert json.loads(requests[0].content) == PAYLOAD
    assert limiter.weights == [1]


@pytest.mark.asyncio
async def test_post_info_uses_info_endpoint_and_weight():
    limiter = RecordingLimiter()
    transport, requests = build_transport([httpx.Response(200, json={"universe": []})], rate_limiter=limiter)

    result = await transport.post_info({"type": "meta"}, 20)

    assert result == {"universe": []}
    assert requests[0].url.path == "/info"
    assert limiter.weights == [20]


@pytest.mark.asyncio
async def test_engine_error_status_is_a_rejection():
    transport, requests = build_transport(
        [httpx.Response(200, json={"status": "err", "response": "User or API Wallet does not exist."})]
    )

    with pytest.raises(RemoteRejectionError, match="does not exist") as exc_info:
        await transport.send(PAYLOAD)

    assert exc_info.value.response["status"] == "err"
    assert len(requests) == 1


@pytest.mark.asyncio
async def test_client_error_is_not_retried():
    transport, requests = build_transport([httpx.Response(422, text="Failed to deserialize the JSON body")])

    with pytest.raises(RemoteRejectionError) as exc_info:
        await transport.send(PAYLOAD)

    assert exc_info.value.status_code == 422
    assert len(requests) == 1


@pytest.mark.asyncio
async def test_rate_limit_is_retried_until_success():
    limiter = RecordingLimiter()
    transport, requests = build_transport(
        [httpx.Response(429), httpx.Response(200, json={"status": "ok"})],
        rate_limiter=limiter,
    )

    result = await transport.send(PAYLOAD)

    assert result == {"status": "ok"}
    assert len(requests) == 2
    assert limiter.weights == [1, 1]


@pytest.mark.asyncio
async def test_server_errors_exhaust_attempts_and_reraise():
    transport, requests = build_transport([httpx.Response(502, text="bad gateway")], max_attempts=3)

    with pytest.raises(TransportError) as exc_info:
        await transport.send(PAYLOAD)

    assert exc_info.value.status_code == 502
    assert not isinstance(exc_info.value, RemoteRejectionError)
    assert len(requests) == 3


@pytest.mark.asyncio
async def test_rate_limit_error_surfaces_after_last_attempt():
    transport, requests = build_transport([httpx.Response(429)], max_attempts=2)

    with pytest.raises(RateLimitError):
        await transport.send(PAYLOAD)

    assert len(requests) == 2


@pytest.mark.asyncio
async def test_connection_failure_maps_to_transport_error():
    transport, requests = build_transport([httpx.ConnectError("connection refused")], max_attempts=1)

    with pytest.raises(TransportError, match="failed"):
        await transport.send(PAYLOAD)

    assert len(requests) == 1


@pytest.mark.asyncio
async def test_timeout_maps_to_transport_error():
    transport, _ = build_transport([httpx.ReadTimeout("read timed out")], max_attempts=1)

    with pytest.raises(TransportError, match="timed out"):
        await transport.send(PAYLOAD)


@pytest.mark.asyncio
async def test_non_json_body_is_a_transport_error():
    transport, _ = build_transport([httpx.Response(200, text="<html>maintenance</html>")], max_attempts=1)

    with pytest.raises(TransportError, match="non-JSON"):
        await transport.send(PAYLOAD)


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        HttpRequestTransport(BASE_URL, max_attempts=0)
