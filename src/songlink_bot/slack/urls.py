"""URL extraction from Slack mrkdwn text and free-form slash command text."""

import ipaddress
import re
from urllib.parse import urlsplit

from songlink_bot.models.music import CandidateUrl, UrlSource

# Matches Slack mrkdwn URL format: <https://example.com> or <https://example.com|label>
# Does NOT match user refs <@U123>, channel refs <#C123>, or special mentions <!here>
SLACK_URL_PATTERN = re.compile(r"<(https?://[^|>]+)(?:\|[^>]*)?>")

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
HOST_LABEL_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def extract_urls(text: str) -> list[CandidateUrl]:
    """Extract all URLs from Slack mrkdwn text.

    Handles both <url> and <url|label> formats. Excludes user mentions,
    channel references, and special mentions.
    """
    return [
        CandidateUrl(url=url, source=UrlSource.MARKDOWN)
        for url in SLACK_URL_PATTERN.findall(text)
    ]


def extract_command_urls(text: str) -> list[CandidateUrl]:
    """Extract URLs from plain slash command text.

    Splits on whitespace. A token without a scheme gets one retry with
    ``https://`` prepended. Tokens that are still not absolute URLs are
    dropped silently since command text is free-form.
    """
    urls: list[CandidateUrl] = []
    for token in text.split():
        candidate = token if SCHEME_PATTERN.match(token) else f"https://{token}"
        if is_absolute_url(candidate):
            urls.append(CandidateUrl(url=candidate, source=UrlSource.PLAIN_TEXT))
    return urls


def is_absolute_url(value: str) -> bool:
    """Return True if value has a scheme and a valid host (and port, if given)."""
    try:
        parts = urlsplit(value)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False

    if not parts.scheme or not parts.hostname:
        return False
    return _is_valid_host(parts.hostname)


def _is_valid_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    labels = host.split(".")
    if len(labels) < 2:
        return False
    return all(HOST_LABEL_PATTERN.match(label) for label in labels)
