"""Slack webhook payload models.

Only the fields the bot acts on are declared; Slack sends many more and
pydantic ignores them. Push events are discriminated on their ``type`` field.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class UrlVerificationChallenge(BaseModel):
    """One-shot handshake sent when the events URL is configured."""

    type: Literal["url_verification"]
    challenge: str


class RateLimitedNotice(BaseModel):
    """Sent when Slack stops delivering events because the app is over its limit."""

    type: Literal["app_rate_limited"]
    team_id: str = ""
    api_app_id: str = ""
    minute_rate_limited: int | None = None


class SharedLink(BaseModel):
    url: str
    domain: str = ""


class LinkSharedEvent(BaseModel):
    """A message containing links from an app-registered domain was posted."""

    type: Literal["link_shared"]
    channel: str
    message_ts: str
    user: str = ""
    links: list[SharedLink] = Field(default_factory=list)
    is_bot_user_member: bool = False
    thread_ts: str | None = None


class MessageEvent(BaseModel):
    """A message posted to a channel the bot can see."""

    type: Literal["message"]
    channel: str
    ts: str  # e.g., "1234567890.123456"
    user: str | None = None
    text: str = ""
    subtype: str | None = None  # bot_message, message_changed, channel_join, ...
    bot_id: str | None = None
    hidden: bool | None = None
    thread_ts: str | None = None


CallbackEvent = Annotated[LinkSharedEvent | MessageEvent, Field(discriminator="type")]


class EventCallback(BaseModel):
    """Envelope wrapping every Events API content event."""

    type: Literal["event_callback"]
    team_id: str = ""
    event_id: str = ""
    event: CallbackEvent


PushEvent = Annotated[
    UrlVerificationChallenge | RateLimitedNotice | EventCallback,
    Field(discriminator="type"),
]


class UnsupportedEvent(BaseModel):
    """A well-formed event_callback whose inner event has no handler."""

    event_type: str


class SlashCommandEvent(BaseModel):
    """Form fields of a slash command invocation."""

    command: str
    user_id: str
    channel_id: str = ""
    text: str = ""
    team_id: str = ""
    response_url: str = ""
    trigger_id: str = ""


class InteractionType(str, Enum):
    """Interaction payload types Slack can deliver to the interactivity URL."""

    BLOCK_ACTIONS = "block_actions"
    VIEW_SUBMISSION = "view_submission"
    VIEW_CLOSED = "view_closed"
    DIALOG_SUBMISSION = "dialog_submission"
    MESSAGE_ACTION = "message_action"
    SHORTCUT = "shortcut"


class InteractionEvent(BaseModel):
    """Decoded ``payload`` form field of an interaction request."""

    type: InteractionType
    callback_id: str | None = None
    trigger_id: str | None = None
