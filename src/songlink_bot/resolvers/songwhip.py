"""Songwhip lookup: POST a URL, get back the matching songwhip.com page."""

from urllib.parse import urljoin

import httpx
from pydantic import BaseModel, Field

from songlink_bot.config import get_settings
from songlink_bot.models.music import LinkMetadata, ResolvedLink
from songlink_bot.resolvers.classify import classify_response, resolution_error
from songlink_bot.resolvers.client import get_http_client

SERVICE = "songwhip"


class SongwhipArtist(BaseModel):
    name: str
    description: str | None = None
    image: str | None = None


class SongwhipLink(BaseModel):
    link: str
    countries: list[str] | None = None


class SongwhipResponse(BaseModel):
    """Body of POST https://songwhip.com/."""

    name: str
    url: str  # May be site-relative
    image: str | None = None
    artists: list[SongwhipArtist] = Field(default_factory=list)
    links: dict[str, list[SongwhipLink]] = Field(default_factory=dict)

    def to_metadata(self, base_url: str) -> LinkMetadata:
        return LinkMetadata(
            title=self.name,
            artist_names=[artist.name for artist in self.artists],
            page_url=urljoin(base_url, self.url),
            thumbnail_url=self.image,
            platform_links={
                platform: entries[0].link
                for platform, entries in self.links.items()
                if entries
            },
        )


async def lookup_songwhip(url: str) -> ResolvedLink:
    """Look up one URL on Songwhip. Never raises for HTTP or body errors."""
    settings = get_settings()
    client = await get_http_client(SERVICE)
    try:
        response = await client.post(settings.songwhip_api_url, json={"url": url})
    except httpx.HTTPError as exc:
        return resolution_error(SERVICE, url, f"transport error: {exc!r}")

    return classify_response(
        SERVICE,
        url,
        response,
        lambda body: SongwhipResponse.model_validate_json(body).to_metadata(
            settings.songwhip_api_url
        ),
    )
