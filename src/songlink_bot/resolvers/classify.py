"""Map a resolution service HTTP response onto a ResolvedLink."""

import logging
from collections.abc import Callable
from urllib.parse import urlsplit

import httpx

from songlink_bot.models.music import Found, LinkMetadata, NotFound, ResolutionError, ResolvedLink

logger = logging.getLogger(__name__)

# Both services answer 400 when they cannot match the submitted URL
NO_MATCH_STATUS = 400


def classify_response(
    service: str,
    url: str,
    response: httpx.Response,
    parse: Callable[[bytes], LinkMetadata],
) -> ResolvedLink:
    """Classify a service response as Found, NotFound, or ResolutionError.

    Args:
        service: Service name, for logging.
        url: The candidate URL that was looked up.
        response: The service's HTTP response.
        parse: Decodes a 2xx body into LinkMetadata. May raise ValueError
            (including pydantic.ValidationError) on a malformed body.
    """
    if response.is_success:
        try:
            metadata = parse(response.content)
        except ValueError as exc:
            return resolution_error(service, url, f"malformed response body: {exc}")
        return Found(url=url, metadata=metadata)

    if response.status_code == NO_MATCH_STATUS:
        # The URL itself is not logged: it may identify private media
        logger.debug("No match from %s for submitted url", service)
        return NotFound(url=url)

    return resolution_error(service, url, f"unexpected status {response.status_code}")


def resolution_error(service: str, url: str, cause: str) -> ResolutionError:
    """Log a failed lookup (host only) and return the failure result."""
    logger.warning(
        "Lookup on %s failed for url host %s: %s",
        service,
        urlsplit(url).hostname,
        cause,
    )
    return ResolutionError(url=url, cause=cause)
