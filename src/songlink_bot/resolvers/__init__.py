"""Link resolution against Songlink and Songwhip.

Public API:
    get_lookup(service) -> LookupFn
        Lookup coroutine for a configured service name.
    resolve_links(candidates, lookup) -> list[ResolvedLink]
        Concurrent, order-preserving batch resolution.
"""

from songlink_bot.resolvers.batch import LookupFn, resolve_links
from songlink_bot.resolvers.client import close_clients, get_http_client, reset_clients
from songlink_bot.resolvers.songlink import lookup_songlink
from songlink_bot.resolvers.songwhip import lookup_songwhip

RESOLVERS: dict[str, LookupFn] = {
    "songlink": lookup_songlink,
    "songwhip": lookup_songwhip,
}


def get_lookup(service: str) -> LookupFn:
    """Return the lookup coroutine for a service name. Raises KeyError if unknown."""
    return RESOLVERS[service]


__all__ = [
    "LookupFn",
    "RESOLVERS",
    "close_clients",
    "get_http_client",
    "get_lookup",
    "lookup_songlink",
    "lookup_songwhip",
    "reset_clients",
    "resolve_links",
]
