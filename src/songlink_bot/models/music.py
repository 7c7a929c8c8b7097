"""Candidate URL and link resolution result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UrlSource(str, Enum):
    """Where a candidate URL was extracted from."""

    MARKDOWN = "markdown"  # Slack mrkdwn <url|label> in event text
    PLAIN_TEXT = "plain_text"  # Whitespace token in slash command text


class CandidateUrl(BaseModel):
    """An absolute URL (scheme + host) pulled from message text."""

    model_config = ConfigDict(frozen=True)

    url: str
    source: UrlSource


class LinkMetadata(BaseModel):
    """Service-independent metadata for one resolved song, album or artist."""

    title: str
    artist_names: list[str] = Field(default_factory=list)
    page_url: str  # Canonical share page (song.link / songwhip.com)
    thumbnail_url: str | None = None
    platform_links: dict[str, str] = Field(default_factory=dict)  # platform key -> URL


class Found(BaseModel):
    """The service matched the URL."""

    url: str
    metadata: LinkMetadata


class NotFound(BaseModel):
    """The service answered but had no match for the URL."""

    url: str


class ResolutionError(BaseModel):
    """Transport error, unexpected status, or malformed body from the service."""

    url: str
    cause: str


ResolvedLink = Found | NotFound | ResolutionError
