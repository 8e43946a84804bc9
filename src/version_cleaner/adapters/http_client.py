"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and connection retries for every request.
- Makes testing easy: respx intercepts the client it builds.
"""

from __future__ import annotations

import httpx

from version_cleaner.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every query behaves the same way.
    - Retries apply to connection failures only; an HTTP error response is
      returned as-is for the caller to map.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=httpx.AsyncHTTPTransport(retries=settings.http_retries),
    )
