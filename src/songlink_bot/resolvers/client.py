"""Shared httpx clients for the resolution services.

One AsyncClient per service, created on first use and reused for the life of
the process so connections and TLS sessions are pooled. Follows the lazy-init
pattern of slack/client.py.
"""

import httpx

from songlink_bot.config import get_settings

_clients: dict[str, httpx.AsyncClient] = {}


async def get_http_client(service: str) -> httpx.AsyncClient:
    """Return the cached AsyncClient for a service, creating it on first call."""
    client = _clients.get(service)
    if client is None:
        settings = get_settings()
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.resolver_timeout_seconds),
            headers={"User-Agent": "songlink-bot"},
        )
        _clients[service] = client
    return client


async def close_clients() -> None:
    """Close and forget every cached client. Called on application shutdown."""
    clients = list(_clients.values())
    _clients.clear()
    for client in clients:
        await client.aclose()


def reset_clients() -> None:
    """Forget cached clients without closing them. Used for testing."""
    _clients.clear()
