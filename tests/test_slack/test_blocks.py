"""Tests for Block Kit rendering of composed replies."""

from songlink_bot.models.message import ComposedMessage, DeepLink, MessageSection
from songlink_bot.slack.blocks import (
    add_emoji_colons,
    build_blocks,
    build_fallback_text,
    build_links_block,
    build_main_block,
    escape_link_url,
    escape_mrkdwn,
    format_link_label,
)


def _section(**overrides: object) -> MessageSection:
    base = {
        "page_url": "https://song.link/us/i/44733632",
        "title": "What We Worked For",
        "byline": "Against Me!",
        "thumbnail_url": "https://i.scdn.co/image/cover.jpg",
        "links": [
            DeepLink(platform="deezer", label="Deezer", url="https://www.deezer.com/track/1"),
            DeepLink(platform="spotify", label="Spotify", url="https://open.spotify.com/track/x"),
        ],
    }
    base.update(overrides)
    return MessageSection(**base)


def test_main_block_links_title_and_byline():
    block = build_main_block(_section())
    assert block["type"] == "section"
    assert block["text"]["type"] == "mrkdwn"
    assert block["text"]["text"] == (
        "<https://song.link/us/i/44733632|_*What We Worked For*_> \n by Against Me!"
    )


def test_main_block_with_thumbnail_has_image_accessory():
    block = build_main_block(_section())
    assert block["accessory"]["type"] == "image"
    assert block["accessory"]["image_url"] == "https://i.scdn.co/image/cover.jpg"
    assert block["accessory"]["alt_text"]


def test_main_block_without_thumbnail_has_no_accessory():
    block = build_main_block(_section(thumbnail_url=None))
    assert "accessory" not in block


def test_main_block_without_artists_omits_byline():
    block = build_main_block(_section(byline=""))
    assert " by " not in block["text"]["text"]


def test_main_block_escapes_title():
    block = build_main_block(_section(title="Rock <&> Roll"))
    assert "Rock &lt;&amp;&gt; Roll" in block["text"]["text"]


def test_main_block_escapes_page_url():
    block = build_main_block(_section(page_url="https://song.link/s?a=1|b>c", byline=""))
    assert block["text"]["text"] == "<https://song.link/s?a=1%7Cb%3Ec|_*What We Worked For*_>"


def test_links_block_escapes_urls():
    links = [DeepLink(platform="spotify", label="Spotify", url="https://open.spotify.com/t/x|y<z>")]
    block = build_links_block(_section(links=links))
    assert block["fields"][0]["text"] == "<https://open.spotify.com/t/x%7Cy%3Cz%3E|:spotify: _*Spotify*_>"


def test_links_block_keeps_order_and_emoji():
    block = build_links_block(_section())
    texts = [field["text"] for field in block["fields"]]
    assert texts == [
        "<https://www.deezer.com/track/1|:deezer: _*Deezer*_>",
        "<https://open.spotify.com/track/x|:spotify: _*Spotify*_>",
    ]


def test_links_block_none_when_no_links():
    assert build_links_block(_section(links=[])) is None


def test_build_blocks_two_per_section():
    message = ComposedMessage(sections=[_section(), _section(links=[])])
    blocks = build_blocks(message)
    assert len(blocks) == 3
    assert "fields" in blocks[1]
    assert "text" in blocks[2]


def test_fallback_text_lists_sections():
    message = ComposedMessage(sections=[_section(), _section(title="Other", byline="")])
    assert build_fallback_text(message) == "What We Worked For by Against Me!\nOther"


def test_format_label_without_emoji():
    link = DeepLink(platform="tidal", label="Tidal", url="https://tidal.com/x")
    assert format_link_label(link) == "_*Tidal*_"


def test_add_emoji_colons():
    assert add_emoji_colons(":rust:") == ":rust:"
    assert add_emoji_colons(":rust") == ":rust:"
    assert add_emoji_colons("rust:") == ":rust:"
    assert add_emoji_colons("rust") == ":rust:"


def test_escape_mrkdwn_leaves_plain_text():
    assert escape_mrkdwn("Against Me!") == "Against Me!"


def test_escape_link_url_leaves_ordinary_urls():
    url = "https://geo.music.apple.com/us/album/_/44734006?i=44733632&app=music"
    assert escape_link_url(url) == url
