"""Slack ingress: webhook routing, signature verification, URL extraction, and replies."""

from songlink_bot.slack.client import get_slack_client, reset_client
from songlink_bot.slack.notifier import deliver, post_direct_message, post_to_channel
from songlink_bot.slack.router import router

__all__ = [
    "deliver",
    "get_slack_client",
    "post_direct_message",
    "post_to_channel",
    "reset_client",
    "router",
]
