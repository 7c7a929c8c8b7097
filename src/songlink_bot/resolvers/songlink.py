"""Songlink (Odesli) lookup: one URL in, cross-platform links out."""

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from songlink_bot.config import Settings, get_settings
from songlink_bot.models.music import LinkMetadata, ResolvedLink
from songlink_bot.resolvers.classify import classify_response, resolution_error
from songlink_bot.resolvers.client import get_http_client

SERVICE = "songlink"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SonglinkEntity(_CamelModel):
    """One platform's view of the song, keyed by entity unique id."""

    id: str
    type: str
    title: str
    artist_name: str | None = None
    thumbnail_url: str | None = None
    api_provider: str = ""
    platforms: list[str] = Field(default_factory=list)


class SonglinkPlatformLink(_CamelModel):
    url: str
    entity_unique_id: str = ""
    country: str = ""


class SonglinkResponse(_CamelModel):
    """Body of GET /v1-alpha.1/links."""

    entity_unique_id: str
    page_url: str
    entities_by_unique_id: dict[str, SonglinkEntity]
    links_by_platform: dict[str, SonglinkPlatformLink] = Field(default_factory=dict)

    def to_metadata(self) -> LinkMetadata:
        """Flatten into LinkMetadata, describing the song with its primary entity.

        Falls back to the first entity when the primary one is missing.
        Raises ValueError if the response carries no entities at all.
        """
        entity = self.entities_by_unique_id.get(self.entity_unique_id)
        if entity is None:
            entity = next(iter(self.entities_by_unique_id.values()), None)
        if entity is None:
            raise ValueError("Songlink response has no entities")

        return LinkMetadata(
            title=entity.title,
            artist_names=[entity.artist_name] if entity.artist_name else [],
            page_url=self.page_url,
            thumbnail_url=entity.thumbnail_url,
            platform_links={
                platform: link.url for platform, link in self.links_by_platform.items()
            },
        )


def build_songlink_params(url: str, settings: Settings) -> dict[str, str]:
    """Build the query string for a lookup. Optional params are sent only when configured."""
    params = {"url": url}
    if settings.songlink_user_country:
        params["userCountry"] = settings.songlink_user_country
    if settings.songlink_api_key:
        params["key"] = settings.songlink_api_key
    return params


def parse_songlink_body(body: bytes) -> LinkMetadata:
    return SonglinkResponse.model_validate_json(body).to_metadata()


async def lookup_songlink(url: str) -> ResolvedLink:
    """Look up one URL on Songlink. Never raises for HTTP or body errors."""
    settings = get_settings()
    client = await get_http_client(SERVICE)
    try:
        response = await client.get(
            settings.songlink_api_url,
            params=build_songlink_params(url, settings),
        )
    except httpx.HTTPError as exc:
        return resolution_error(SERVICE, url, f"transport error: {exc!r}")

    return classify_response(SERVICE, url, response, parse_songlink_body)
