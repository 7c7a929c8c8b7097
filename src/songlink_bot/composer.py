"""Build the rendering-independent reply for a batch of resolved links."""

from songlink_bot.models.message import ComposedMessage, DeepLink, MessageSection
from songlink_bot.models.music import Found, LinkMetadata, ResolvedLink

# Platforms shown to users. Anything else the services return stays hidden.
PLATFORM_DISPLAY_NAMES: dict[str, str] = {
    "appleMusic": "Apple Music",
    "deezer": "Deezer",
    "spotify": "Spotify",
    "youtube": "Youtube",
    "youtubeMusic": "YT Music",
}


def compose_message(results: list[ResolvedLink]) -> ComposedMessage | None:
    """Compose one section per Found result, in input order.

    NotFound and ResolutionError entries are dropped. Returns None when
    nothing was found so the caller can skip posting entirely.
    """
    sections = [
        build_section(result.metadata) for result in results if isinstance(result, Found)
    ]
    if not sections:
        return None
    return ComposedMessage(sections=sections)


def build_section(metadata: LinkMetadata) -> MessageSection:
    return MessageSection(
        page_url=metadata.page_url,
        title=metadata.title,
        byline=", ".join(metadata.artist_names),
        thumbnail_url=metadata.thumbnail_url or None,
        links=build_deep_links(metadata.platform_links),
    )


def build_deep_links(platform_links: dict[str, str]) -> list[DeepLink]:
    """Labelled platform links sorted by platform key; unlabelled platforms omitted."""
    return [
        DeepLink(platform=platform, label=PLATFORM_DISPLAY_NAMES[platform], url=url)
        for platform, url in sorted(platform_links.items())
        if platform in PLATFORM_DISPLAY_NAMES
    ]
