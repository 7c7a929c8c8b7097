"""Classification of inbound Slack payloads into typed events."""

import logging
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, TypeAdapter, ValidationError

from songlink_bot.models.slack import (
    EventCallback,
    InteractionEvent,
    MessageEvent,
    PushEvent,
    RateLimitedNotice,
    SlashCommandEvent,
    UnsupportedEvent,
    UrlVerificationChallenge,
)

logger = logging.getLogger(__name__)

_PUSH_EVENT_ADAPTER: TypeAdapter = TypeAdapter(PushEvent)

# Subtypes that describe a change to an earlier message, not a new one
EDIT_SUBTYPES = frozenset({"message_changed", "message_deleted"})


class _InnerEventStub(BaseModel):
    type: str


class _EventEnvelopeStub(BaseModel):
    type: Literal["event_callback"]
    event: _InnerEventStub


def parse_push_event(
    payload: object,
) -> UrlVerificationChallenge | RateLimitedNotice | EventCallback | UnsupportedEvent | None:
    """Decode an Events API body.

    Tries the full set of known event shapes first. If that fails but the body
    is still an event_callback envelope, returns UnsupportedEvent naming the
    inner event type. Returns None when the body matches nothing.
    """
    try:
        return _PUSH_EVENT_ADAPTER.validate_python(payload)
    except ValidationError:
        pass

    try:
        envelope = _EventEnvelopeStub.model_validate(payload)
    except ValidationError:
        return None
    return UnsupportedEvent(event_type=envelope.event.type)


def parse_slash_command(form: dict[str, str]) -> SlashCommandEvent | None:
    try:
        return SlashCommandEvent.model_validate(form)
    except ValidationError:
        return None


def parse_interaction(raw_payload: str) -> InteractionEvent | None:
    """Decode the JSON ``payload`` form field of an interaction request."""
    try:
        return InteractionEvent.model_validate_json(raw_payload)
    except ValidationError:
        return None


@dataclass(frozen=True)
class MessageTraits:
    """Facts about a message event that decide whether the bot replies to it."""

    is_bot: bool
    is_hidden: bool
    is_threaded: bool
    is_edit: bool  # message_changed / message_deleted notifications


def describe_message(event: MessageEvent) -> MessageTraits:
    return MessageTraits(
        is_bot=event.subtype == "bot_message" or event.bot_id is not None,
        is_hidden=bool(event.hidden),
        is_threaded=event.thread_ts is not None,
        is_edit=event.subtype in EDIT_SUBTYPES,
    )
