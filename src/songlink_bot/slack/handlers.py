"""Slack event dispatch and message filtering logic."""

import logging

from fastapi import BackgroundTasks, Response

from songlink_bot.composer import compose_message
from songlink_bot.config import get_settings
from songlink_bot.models.message import ChannelTarget, ReplyTarget, UserTarget
from songlink_bot.models.music import CandidateUrl, Found, UrlSource
from songlink_bot.models.slack import (
    EventCallback,
    InteractionType,
    LinkSharedEvent,
    MessageEvent,
    RateLimitedNotice,
    UnsupportedEvent,
    UrlVerificationChallenge,
)
from songlink_bot.resolvers import get_lookup, resolve_links
from songlink_bot.slack.events import (
    describe_message,
    parse_interaction,
    parse_push_event,
    parse_slash_command,
)
from songlink_bot.slack.notifier import deliver
from songlink_bot.slack.responses import ack, challenge_response, server_error
from songlink_bot.slack.urls import extract_command_urls, extract_urls, is_absolute_url

logger = logging.getLogger(__name__)


class UnsupportedInteractionError(Exception):
    """A recognised interaction type that has no handler yet."""

    def __init__(self, interaction_type: InteractionType) -> None:
        super().__init__(f"interaction type {interaction_type.value!r} is not supported yet")
        self.interaction_type = interaction_type


def handle_slack_event(payload: object, background_tasks: BackgroundTasks) -> Response:
    """Dispatch an Events API payload based on its type.

    - url_verification: echo the challenge token
    - app_rate_limited: acknowledge, nothing else
    - event_callback: process link_shared / message events
    - anything else: acknowledge with 200
    """
    event = parse_push_event(payload)

    if isinstance(event, UrlVerificationChallenge):
        return challenge_response(event.challenge)

    if isinstance(event, RateLimitedNotice):
        logger.warning(
            "Slack rate limited event delivery for team %s (minute %s)",
            event.team_id,
            event.minute_rate_limited,
        )
        return ack()

    if isinstance(event, EventCallback):
        inner = event.event
        if isinstance(inner, LinkSharedEvent):
            handle_link_shared(inner, background_tasks)
        else:
            handle_message_event(inner, background_tasks)
        return ack()

    if isinstance(event, UnsupportedEvent):
        logger.info("Unhandled event sub type: %s", event.event_type)
        return ack()

    payload_type = payload.get("type") if isinstance(payload, dict) else None
    logger.info("Unsupported payload shape (type=%r)", payload_type)
    return ack()


def handle_link_shared(event: LinkSharedEvent, background_tasks: BackgroundTasks) -> None:
    """Reply in thread to a shared link, but only where the bot is a member."""
    if not event.is_bot_user_member:
        logger.info("Ignoring link_shared in %s: bot is not a member", event.channel)
        return

    candidates = [
        CandidateUrl(url=link.url, source=UrlSource.MARKDOWN)
        for link in event.links
        if is_absolute_url(link.url)
    ]
    dispatch_links(
        candidates,
        ChannelTarget(channel_id=event.channel, thread_ts=event.message_ts),
        get_settings().events_resolver,
        background_tasks,
    )


def handle_message_event(event: MessageEvent, background_tasks: BackgroundTasks) -> None:
    """Apply message filters and dispatch URL processing to background.

    Filters are applied in order:
    1. Bot-authored (bot_message subtype or bot_id) -> skip
    2. Hidden (deletions and other hidden system messages) -> skip
    3. Edit or deletion notification -> skip
    4. Thread reply -> skip
    5. No URLs -> skip
    """
    traits = describe_message(event)

    # Filters 1-4: only new top-level messages written by people
    if traits.is_bot or traits.is_hidden or traits.is_edit or traits.is_threaded:
        return

    # Filter 5: No URLs in message
    candidates = extract_urls(event.text)
    if not candidates:
        return

    dispatch_links(
        candidates,
        ChannelTarget(channel_id=event.channel, thread_ts=event.ts),
        get_settings().events_resolver,
        background_tasks,
    )


def handle_slash_command(form: dict[str, str], background_tasks: BackgroundTasks) -> Response:
    """Scan slash command text for URLs and DM the results to the invoking user.

    Always acknowledges immediately with an empty body; lookups and the DM
    happen in the background.
    """
    command = parse_slash_command(form)
    if command is None:
        logger.info("Unsupported slash command payload (fields: %s)", sorted(form))
        return ack()

    candidates = extract_command_urls(command.text)
    if not candidates:
        logger.debug("No urls found in slash command")
        return ack()

    dispatch_links(
        candidates,
        UserTarget(user_id=command.user_id),
        get_settings().commands_resolver,
        background_tasks,
    )
    return ack()


def handle_interaction(raw_payload: str | None) -> Response:
    """Handle an interactivity request.

    No interaction type has an action yet, so every request ends in a 500 with
    a logged diagnostic. That keeps it distinguishable from a 403 signature
    rejection.
    """
    interaction = parse_interaction(raw_payload) if raw_payload else None
    if interaction is None:
        logger.error(
            "Interaction `payload` is missing, not valid JSON, or not a known interaction type"
        )
        return server_error()

    try:
        dispatch_interaction(interaction.type)
    except UnsupportedInteractionError as exc:
        logger.error("Cannot handle interaction: %s", exc)
        return server_error()
    return ack()


def dispatch_interaction(interaction_type: InteractionType) -> None:
    raise UnsupportedInteractionError(interaction_type)


def dispatch_links(
    candidates: list[CandidateUrl],
    target: ReplyTarget,
    service: str,
    background_tasks: BackgroundTasks,
) -> None:
    """Cap the batch and schedule resolution + reply after the response is sent."""
    if not candidates:
        return

    cap = get_settings().max_urls_per_message
    if len(candidates) > cap:
        logger.info("Capping %d URL(s) to the first %d", len(candidates), cap)
        candidates = candidates[:cap]

    logger.info(
        "Dispatching %d URL(s) to %s for %s",
        len(candidates),
        service,
        describe_target(target),
    )

    background_tasks.add_task(
        process_links,
        candidates=candidates,
        target=target,
        service=service,
    )


async def process_links(candidates: list[CandidateUrl], target: ReplyTarget, service: str) -> None:
    """Resolve the batch, compose the reply, and deliver it.

    Runs detached from the webhook response. Lookup and delivery failures are
    handled below this function; anything unexpected is logged here so a
    single bad batch never escapes the background task.
    """
    try:
        results = await resolve_links(candidates, get_lookup(service))
        found = sum(1 for result in results if isinstance(result, Found))
        logger.info("Resolved %d/%d URL(s) via %s", found, len(results), service)

        message = compose_message(results)
        if message is None:
            logger.info("No matches for %s, skipping reply", describe_target(target))
            return

        await deliver(target, message)
    except Exception as exc:
        logger.error(
            "Link pipeline failed for %s: %s", describe_target(target), exc, exc_info=True
        )


def describe_target(target: ReplyTarget) -> str:
    if isinstance(target, UserTarget):
        return f"user {target.user_id}"
    if target.thread_ts:
        return f"channel {target.channel_id} thread {target.thread_ts}"
    return f"channel {target.channel_id}"
