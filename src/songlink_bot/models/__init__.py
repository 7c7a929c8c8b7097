"""Data models for the songlink bot pipeline."""

from songlink_bot.models.message import (
    ChannelTarget,
    ComposedMessage,
    DeepLink,
    MessageSection,
    ReplyTarget,
    UserTarget,
)
from songlink_bot.models.music import (
    CandidateUrl,
    Found,
    LinkMetadata,
    NotFound,
    ResolutionError,
    ResolvedLink,
    UrlSource,
)
from songlink_bot.models.slack import (
    EventCallback,
    InteractionEvent,
    InteractionType,
    LinkSharedEvent,
    MessageEvent,
    RateLimitedNotice,
    SlashCommandEvent,
    UnsupportedEvent,
    UrlVerificationChallenge,
)

__all__ = [
    "CandidateUrl",
    "UrlSource",
    "LinkMetadata",
    "Found",
    "NotFound",
    "ResolutionError",
    "ResolvedLink",
    "DeepLink",
    "MessageSection",
    "ComposedMessage",
    "ChannelTarget",
    "UserTarget",
    "ReplyTarget",
    "UrlVerificationChallenge",
    "RateLimitedNotice",
    "EventCallback",
    "LinkSharedEvent",
    "MessageEvent",
    "UnsupportedEvent",
    "SlashCommandEvent",
    "InteractionType",
    "InteractionEvent",
]
