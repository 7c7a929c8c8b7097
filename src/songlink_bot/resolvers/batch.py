"""Concurrent resolution of a batch of candidate URLs."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from songlink_bot.models.music import CandidateUrl, ResolutionError, ResolvedLink

logger = logging.getLogger(__name__)

LookupFn = Callable[[str], Awaitable[ResolvedLink]]


async def resolve_links(candidates: list[CandidateUrl], lookup: LookupFn) -> list[ResolvedLink]:
    """Resolve all candidates in parallel, one result per candidate, in order.

    Waits for every lookup. A lookup that raises is recorded as a
    ResolutionError in its slot rather than aborting its siblings.
    """
    results = await asyncio.gather(
        *[lookup(candidate.url) for candidate in candidates],
        return_exceptions=True,
    )

    resolved: list[ResolvedLink] = []
    for candidate, result in zip(candidates, results):
        if isinstance(result, Exception):
            logger.error("Lookup raised unexpectedly: %r", result, exc_info=result)
            resolved.append(ResolutionError(url=candidate.url, cause=repr(result)))
        elif isinstance(result, BaseException):
            raise result
        else:
            resolved.append(result)
    return resolved
