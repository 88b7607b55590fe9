"""
Request transport for the Hyperliquid HTTP API.

The client core only depends on the ``RequestTransport`` protocol; the HTTP
implementation owns pacing, retries and mapping of HTTP failures onto the
transport error taxonomy.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from exchange_clients.hyperliquid.common import (
    DEFAULT_REQUEST_WEIGHT,
    EXCHANGE_ENDPOINT,
    INFO_ENDPOINT,
)
from helpers.unified_logger import get_exchange_logger
from networking.exceptions import RateLimitError, RemoteRejectionError, TransportError
from networking.http import create_httpx_client
from networking.rate_limiter import WeightRateLimiter


@runtime_checkable
class RequestTransport(Protocol):
    """Delivers signed payloads and info queries to the remote engine."""

    async def send(self, payload: Dict[str, Any], weight: int = DEFAULT_REQUEST_WEIGHT) -> Dict[str, Any]:
        ...

    async def post_info(self, body: Dict[str, Any], weight: int = DEFAULT_REQUEST_WEIGHT) -> Any:
        ...


def _is_retryable(exc: BaseException) -> bool:
    # Rejections are final; throttling and connectivity failures are not
    return isinstance(exc, TransportError) and not isinstance(exc, RemoteRejectionError)


class HttpRequestTransport:
    """
    JSON-over-HTTP transport for the ``/exchange`` and ``/info`` endpoints.

    Every request first acquires its weight from the rate limiter. Rate-limit
    and connectivity failures are retried with exponential backoff; remote
    rejections are raised immediately. After the last attempt the original
    error is re-raised unchanged.
    """

    def __init__(
        self,
        base_url: str,
        rate_limiter: Optional[WeightRateLimiter] = None,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff_min: float = 0.5,
        backoff_max: float = 8.0,
        proxy_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Any = None,
    ):
        """
        Args:
            base_url: API root, e.g. https://api.hyperliquid.xyz
            rate_limiter: Optional weight limiter shared by all requests
            timeout: Per-request timeout in seconds
            max_attempts: Total attempts per request (1 disables retries)
            backoff_min: Minimum wait between attempts in seconds
            backoff_max: Maximum wait between attempts in seconds
            proxy_url: Optional proxy applied to the default HTTP client
            http_client: Pre-built AsyncClient (its base_url must point at the API root)
            logger: Optional logger (defaults to the hyperliquid exchange logger)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter
        self.max_attempts = max_attempts
        self.backoff_min = backoff_min
        self.backoff_max = backoff_max
        self.logger = logger or get_exchange_logger("hyperliquid", component="transport")
        self._client = http_client or create_httpx_client(
            self.base_url,
            proxy_url=proxy_url,
            timeout=httpx.Timeout(timeout),
        )

    async def __aenter__(self) -> "HttpRequestTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def send(self, payload: Dict[str, Any], weight: int = DEFAULT_REQUEST_WEIGHT) -> Dict[str, Any]:
        """POST a signed payload to ``/exchange``."""
        return await self._post(EXCHANGE_ENDPOINT, payload, weight)

    async def post_info(self, body: Dict[str, Any], weight: int = DEFAULT_REQUEST_WEIGHT) -> Any:
        """POST a query to ``/info``."""
        return await self._post(INFO_ENDPOINT, body, weight)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        self.logger.warning(
            f"⚠️ [HYPERLIQUID] Request attempt {retry_state.attempt_number}/{self.max_attempts} "
            f"failed: {exc}; retrying"
        )

    async def _post(self, path: str, body: Dict[str, Any], weight: int) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=self.backoff_min, max=self.backoff_max),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )
        result: Any = None
        async for attempt in retrying:
            with attempt:
                result = await self._post_once(path, body, weight)
        return result

    async def _post_once(self, path: str, body: Dict[str, Any], weight: int) -> Any:
        if self.rate_limiter is not None:
            await self.rate_limiter.acquire(weight)

        try:
            response = await self._client.post(path, json=body)
        except httpx.TimeoutException as exc:
            raise TransportError(f"POST {path} timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {path} failed: {exc}") from exc

        status = response.status_code
        if status == 429:
            raise RateLimitError(f"POST {path} rate limited", status_code=status)
        if status >= 500:
            raise TransportError(f"POST {path} server error {status}: {response.text}", status_code=status)
        if status >= 400:
            raise RemoteRejectionError(
                f"POST {path} rejected ({status}): {response.text}",
                status_code=status,
                response=response.text,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                f"POST {path} returned non-JSON body: {response.text[:200]}",
                status_code=status,
            ) from exc

        if isinstance(data, dict) and data.get("status") == "err":
            raise RemoteRejectionError(str(data.get("response")), status_code=status, response=data)

        self.logger.debug(f"POST {path} -> {status}")
        return data
