"""Deliver composed replies through the Slack Web API.

All functions are fire-and-forget: they catch and log SlackApiError but never
raise, and there is no retry. The webhook that triggered the reply has already
been acknowledged, so there is nobody to report a failure to.
"""

import logging

from slack_sdk.errors import SlackApiError

from songlink_bot.models.message import ChannelTarget, ComposedMessage, ReplyTarget, UserTarget
from songlink_bot.slack.blocks import build_blocks, build_fallback_text
from songlink_bot.slack.client import get_slack_client

logger = logging.getLogger(__name__)


async def post_to_channel(
    channel_id: str, message: ComposedMessage, thread_ts: str | None = None
) -> bool:
    """Post the reply into a channel, as a thread reply when thread_ts is given.

    Args:
        channel_id: Slack channel ID.
        message: Reply content.
        thread_ts: Timestamp of the message to reply under, if any.

    Returns:
        True if Slack accepted the message.
    """
    try:
        client = await get_slack_client()
        await client.chat_postMessage(
            channel=channel_id,
            thread_ts=thread_ts,
            text=build_fallback_text(message),
            blocks=build_blocks(message),
            unfurl_links=False,
            unfurl_media=False,
        )
    except SlackApiError as exc:
        logger.error(
            "Failed to post reply to channel %s (thread %s): %s",
            channel_id,
            thread_ts,
            _error_code(exc),
            exc_info=True,
        )
        return False
    return True


async def post_direct_message(user_id: str, message: ComposedMessage) -> bool:
    """Open a DM with the user and post the reply into it.

    Returns:
        True if the conversation opened and Slack accepted the message.
    """
    try:
        client = await get_slack_client()
        opened = await client.conversations_open(users=[user_id])
        channel_id = opened["channel"]["id"]
        await client.chat_postMessage(
            channel=channel_id,
            text=build_fallback_text(message),
            blocks=build_blocks(message),
            unfurl_links=False,
            unfurl_media=False,
        )
    except SlackApiError as exc:
        logger.error(
            "Failed to DM user %s: %s", user_id, _error_code(exc), exc_info=True
        )
        return False
    return True


async def deliver(target: ReplyTarget, message: ComposedMessage) -> bool:
    """Send the reply to a channel/thread or a user's DM, depending on the target."""
    if isinstance(target, UserTarget):
        return await post_direct_message(target.user_id, message)
    if isinstance(target, ChannelTarget):
        return await post_to_channel(target.channel_id, message, target.thread_ts)
    raise TypeError(f"Unknown reply target: {target!r}")


def _error_code(exc: SlackApiError) -> str:
    return exc.response.get("error", "") if exc.response else ""
