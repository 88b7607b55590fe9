"""
Networking helpers shared by exchange clients.

This package centralises HTTP client construction, request pacing and the
transport error taxonomy.
"""

from .exceptions import RateLimitError, RemoteRejectionError, TransportError
from .http import create_httpx_client
from .rate_limiter import WeightRateLimiter

__all__ = [
    "RateLimitError",
    "RemoteRejectionError",
    "TransportError",
    "WeightRateLimiter",
    "create_httpx_client",
]
