"""Composed reply and reply target models."""

from pydantic import BaseModel, ConfigDict, Field


class DeepLink(BaseModel):
    platform: str  # Service key, e.g. "appleMusic"
    label: str  # Approved display name, e.g. "Apple Music"
    url: str


class MessageSection(BaseModel):
    """Display content for one resolved link."""

    page_url: str
    title: str
    byline: str  # Artist names joined with ", "
    thumbnail_url: str | None = None
    links: list[DeepLink] = Field(default_factory=list)


class ComposedMessage(BaseModel):
    """Rendering-independent reply: one section per resolved link, in source order."""

    sections: list[MessageSection]


class ChannelTarget(BaseModel):
    """Post into a channel, optionally as a thread reply."""

    model_config = ConfigDict(frozen=True)

    channel_id: str
    thread_ts: str | None = None


class UserTarget(BaseModel):
    """Open a DM with the user, then post into it."""

    model_config = ConfigDict(frozen=True)

    user_id: str


ReplyTarget = ChannelTarget | UserTarget
