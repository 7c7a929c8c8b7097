"""Render a ComposedMessage as Slack Block Kit.

Each section becomes a section block with the title/artist line (plus cover
art when available) followed by a fields block of platform links.
"""

from songlink_bot.models.message import ComposedMessage, DeepLink, MessageSection

# Custom workspace emoji shown next to each platform label
PLATFORM_EMOJI: dict[str, str] = {
    "appleMusic": "apple-inc",
    "deezer": "deezer",
    "spotify": "spotify",
    "youtube": "youtube",
    "youtubeMusic": "youtube-music",
}

_LINK_URL_ESCAPES = str.maketrans({"|": "%7C", "<": "%3C", ">": "%3E"})


def build_blocks(message: ComposedMessage) -> list[dict]:
    blocks: list[dict] = []
    for section in message.sections:
        blocks.append(build_main_block(section))
        links_block = build_links_block(section)
        if links_block is not None:
            blocks.append(links_block)
    return blocks


def build_main_block(section: MessageSection) -> dict:
    text = f"<{escape_link_url(section.page_url)}|_*{escape_mrkdwn(section.title)}*_>"
    if section.byline:
        text += f" \n by {escape_mrkdwn(section.byline)}"

    block: dict = {"type": "section", "text": {"type": "mrkdwn", "text": text}}
    if section.thumbnail_url:
        block["accessory"] = {
            "type": "image",
            "image_url": section.thumbnail_url,
            "alt_text": "song artwork",
        }
    return block


def build_links_block(section: MessageSection) -> dict | None:
    """Fields block of platform links, or None when the section has none."""
    if not section.links:
        return None
    return {
        "type": "section",
        "fields": [
            {
                "type": "mrkdwn",
                "text": f"<{escape_link_url(link.url)}|{format_link_label(link)}>",
            }
            for link in section.links
        ],
    }


def format_link_label(link: DeepLink) -> str:
    label = f"_*{link.label}*_"
    emoji = PLATFORM_EMOJI.get(link.platform)
    if emoji:
        return f"{add_emoji_colons(emoji)} {label}"
    return label


def build_fallback_text(message: ComposedMessage) -> str:
    """Plain-text summary used for notifications and clients without blocks."""
    lines = []
    for section in message.sections:
        if section.byline:
            lines.append(f"{section.title} by {section.byline}")
        else:
            lines.append(section.title)
    return "\n".join(lines)


def add_emoji_colons(emoji_name: str) -> str:
    """Normalize an emoji name to ``:name:`` form."""
    return f":{emoji_name.strip(':')}:"


def escape_link_url(url: str) -> str:
    """Percent-encode the characters that would end a ``<url|label>`` link early."""
    return url.translate(_LINK_URL_ESCAPES)


def escape_mrkdwn(text: str) -> str:
    """Escape the three control characters Slack requires escaped in mrkdwn."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
