"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from songlink_bot.app import app


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def songlink_body() -> dict:
    """Trimmed Songlink /links response for a track with five platforms."""
    return {
        "entityUniqueId": "ITUNES_SONG::44733632",
        "userCountry": "US",
        "pageUrl": "https://song.link/us/i/44733632",
        "entitiesByUniqueId": {
            "ITUNES_SONG::44733632": {
                "id": "44733632",
                "type": "song",
                "title": "What We Worked For",
                "artistName": "Against Me!",
                "thumbnailUrl": "https://is1-ssl.mzstatic.com/image/thumb/512x512bb.jpg",
                "thumbnailWidth": 512,
                "thumbnailHeight": 512,
                "apiProvider": "itunes",
                "platforms": ["appleMusic", "itunes"],
            },
            "YOUTUBE_VIDEO::SZsvRgqi3Fc": {
                "id": "SZsvRgqi3Fc",
                "type": "song",
                "title": "What We Worked For",
                "artistName": "Against Me! - Topic",
                "thumbnailUrl": "https://i.ytimg.com/vi/SZsvRgqi3Fc/hqdefault.jpg",
                "apiProvider": "youtube",
                "platforms": ["youtube", "youtubeMusic"],
            },
        },
        "linksByPlatform": {
            "spotify": {
                "country": "US",
                "url": "https://open.spotify.com/track/12Pgnvye9Vn1X5e9fAzBiG",
                "nativeAppUriDesktop": "spotify:track:12Pgnvye9Vn1X5e9fAzBiG",
                "entityUniqueId": "SPOTIFY_SONG::12Pgnvye9Vn1X5e9fAzBiG",
            },
            "napster": {
                "country": "US",
                "url": "https://play.napster.com/track/tra.7345970",
                "entityUniqueId": "NAPSTER_SONG::tra.7345970",
            },
            "youtube": {
                "country": "US",
                "url": "https://www.youtube.com/watch?v=SZsvRgqi3Fc",
                "entityUniqueId": "YOUTUBE_VIDEO::SZsvRgqi3Fc",
            },
            "appleMusic": {
                "country": "US",
                "url": "https://geo.music.apple.com/us/album/_/44734006?i=44733632",
                "entityUniqueId": "ITUNES_SONG::44733632",
            },
            "deezer": {
                "country": "US",
                "url": "https://www.deezer.com/track/64497787",
                "entityUniqueId": "DEEZER_SONG::64497787",
            },
        },
    }
