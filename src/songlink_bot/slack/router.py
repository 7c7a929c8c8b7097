"""Slack webhook routes, all behind signature verification."""

import json
import logging
from urllib.parse import parse_qsl

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response

from songlink_bot.slack.handlers import (
    handle_interaction,
    handle_slack_event,
    handle_slash_command,
)
from songlink_bot.slack.responses import ack
from songlink_bot.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])


@router.post("/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verify_slack_request),
) -> Response:
    """Receive Events API pushes (JSON).

    Slack retries (X-Slack-Retry-Num header) are acknowledged immediately
    to prevent duplicate replies.
    """
    # Dedup: if Slack is retrying, acknowledge immediately
    if request.headers.get("X-Slack-Retry-Num"):
        return ack()

    try:
        payload = json.loads(body)
    except ValueError:
        logger.info("Events payload is not valid JSON")
        return ack()

    return handle_slack_event(payload, background_tasks)


@router.post("/commands")
async def slack_commands(
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verify_slack_request),
) -> Response:
    """Receive slash commands (form-encoded)."""
    return handle_slash_command(_parse_form(body), background_tasks)


@router.post("/interaction")
async def slack_interaction(body: bytes = Depends(verify_slack_request)) -> Response:
    """Receive interactivity callbacks (form field ``payload`` holding JSON)."""
    return handle_interaction(_parse_form(body).get("payload"))


def _parse_form(body: bytes) -> dict[str, str]:
    # Body is known to be UTF-8: verification rejects anything else
    return dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
