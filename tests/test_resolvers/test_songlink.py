"""Tests for Songlink lookups and response mapping."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from songlink_bot.config import Settings
from songlink_bot.models.music import Found, NotFound, ResolutionError
from songlink_bot.resolvers.songlink import (
    SonglinkResponse,
    build_songlink_params,
    lookup_songlink,
)

TRACK_URL = "https://music.apple.com/us/song/what-we-worked-for/44733632"


def _settings(**overrides: object) -> Settings:
    values = {
        "songlink_api_url": "https://api.song.link/v1-alpha.1/links",
        "songlink_api_key": "",
        "songlink_user_country": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def serve():
    """Patch the shared client with one backed by a MockTransport handler."""
    patches = []

    def _serve(handler, settings: Settings | None = None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        for target, value in (
            ("songlink_bot.resolvers.songlink.get_http_client", AsyncMock(return_value=client)),
            ("songlink_bot.resolvers.songlink.get_settings", lambda: settings or _settings()),
        ):
            p = patch(target, value)
            p.start()
            patches.append(p)

    yield _serve
    for p in patches:
        p.stop()


# -- Response mapping --


def test_response_maps_primary_entity(songlink_body: dict):
    metadata = SonglinkResponse.model_validate(songlink_body).to_metadata()
    assert metadata.title == "What We Worked For"
    assert metadata.artist_names == ["Against Me!"]
    assert metadata.page_url == "https://song.link/us/i/44733632"
    assert metadata.thumbnail_url == "https://is1-ssl.mzstatic.com/image/thumb/512x512bb.jpg"
    assert metadata.platform_links["spotify"] == "https://open.spotify.com/track/12Pgnvye9Vn1X5e9fAzBiG"
    assert set(metadata.platform_links) == {"spotify", "napster", "youtube", "appleMusic", "deezer"}


def test_response_falls_back_to_first_entity(songlink_body: dict):
    songlink_body["entityUniqueId"] = "MISSING::1"
    metadata = SonglinkResponse.model_validate(songlink_body).to_metadata()
    assert metadata.title == "What We Worked For"


def test_response_without_entities_raises(songlink_body: dict):
    songlink_body["entitiesByUniqueId"] = {}
    with pytest.raises(ValueError):
        SonglinkResponse.model_validate(songlink_body).to_metadata()


def test_response_without_artist(songlink_body: dict):
    del songlink_body["entitiesByUniqueId"]["ITUNES_SONG::44733632"]["artistName"]
    metadata = SonglinkResponse.model_validate(songlink_body).to_metadata()
    assert metadata.artist_names == []


# -- Request params --


def test_params_only_url_by_default():
    assert build_songlink_params(TRACK_URL, _settings()) == {"url": TRACK_URL}


def test_params_include_optional_settings():
    params = build_songlink_params(
        TRACK_URL, _settings(songlink_user_country="GB", songlink_api_key="k")
    )
    assert params == {"url": TRACK_URL, "userCountry": "GB", "key": "k"}


# -- lookup_songlink --


async def test_lookup_found(serve, songlink_body: dict):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=songlink_body)

    serve(handler)
    result = await lookup_songlink(TRACK_URL)

    assert isinstance(result, Found)
    assert result.url == TRACK_URL
    assert result.metadata.title == "What We Worked For"
    assert seen[0].method == "GET"
    assert seen[0].url.params["url"] == TRACK_URL
    assert seen[0].url.host == "api.song.link"
    assert seen[0].url.path == "/v1-alpha.1/links"


async def test_lookup_bad_request_is_not_found(serve):
    serve(lambda request: httpx.Response(400, json={"statusCode": 400, "code": "could_not_resolve_entity"}))
    result = await lookup_songlink(TRACK_URL)
    assert result == NotFound(url=TRACK_URL)


async def test_lookup_not_found_does_not_log_url(serve, caplog):
    serve(lambda request: httpx.Response(400))
    with caplog.at_level("DEBUG", logger="songlink_bot.resolvers.classify"):
        await lookup_songlink(TRACK_URL)
    assert caplog.records
    assert all(TRACK_URL not in record.getMessage() for record in caplog.records)


async def test_lookup_server_error_is_failure(serve):
    serve(lambda request: httpx.Response(503, text="unavailable"))
    result = await lookup_songlink(TRACK_URL)
    assert isinstance(result, ResolutionError)
    assert "503" in result.cause


async def test_lookup_rate_limited_is_failure(serve):
    serve(lambda request: httpx.Response(429))
    assert isinstance(await lookup_songlink(TRACK_URL), ResolutionError)


async def test_lookup_malformed_json_is_failure(serve):
    serve(lambda request: httpx.Response(200, text="<html>oops</html>"))
    result = await lookup_songlink(TRACK_URL)
    assert isinstance(result, ResolutionError)
    assert "malformed" in result.cause


async def test_lookup_wrong_shape_is_failure(serve):
    serve(lambda request: httpx.Response(200, content=json.dumps({"pageUrl": "x"}).encode()))
    assert isinstance(await lookup_songlink(TRACK_URL), ResolutionError)


async def test_lookup_transport_error_is_failure(serve):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    serve(handler)
    result = await lookup_songlink(TRACK_URL)
    assert isinstance(result, ResolutionError)
    assert "transport error" in result.cause


async def test_lookup_timeout_is_failure(serve):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    serve(handler)
    assert isinstance(await lookup_songlink(TRACK_URL), ResolutionError)
