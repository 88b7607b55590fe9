from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


def create_httpx_client(
    base_url: str,
    *,
    proxy_url: Optional[str] = None,
    timeout: Optional[httpx.Timeout] = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """
    Return an AsyncClient bound to ``base_url`` that sends and accepts JSON.

    Args:
        base_url: API root (e.g. ``https://api.hyperliquid.xyz``).
        proxy_url: Optional proxy URL applied to all requests.
        timeout: Optional explicit timeout. If omitted, httpx defaults are used.
        **kwargs: Additional parameters forwarded to ``httpx.AsyncClient``.
    """
    client_kwargs: Dict[str, Any] = dict(kwargs)
    client_kwargs["base_url"] = base_url

    if timeout is not None:
        client_kwargs["timeout"] = timeout

    if proxy_url:
        client_kwargs.setdefault("proxy", proxy_url)

    headers = dict(client_kwargs.pop("headers", None) or {})
    headers.setdefault("Content-Type", "application/json")
    client_kwargs["headers"] = headers

    return httpx.AsyncClient(**client_kwargs)
