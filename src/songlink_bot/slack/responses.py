"""Synchronous webhook responses.

Every response Slack receives carries ``X-Slack-No-Retry: 1``: real work runs
in background tasks, so a redelivered webhook would only duplicate replies.
"""

from fastapi import Response
from fastapi.responses import PlainTextResponse

NO_RETRY_HEADERS = {"X-Slack-No-Retry": "1"}


def ack() -> Response:
    """Empty-body 200 acknowledgment."""
    return Response(status_code=200, headers=NO_RETRY_HEADERS)


def challenge_response(challenge: str) -> Response:
    """Echo the url_verification challenge as the response body."""
    return PlainTextResponse(challenge, status_code=200, headers=NO_RETRY_HEADERS)


def server_error() -> Response:
    """Empty-body 500, distinct from the 403 signature rejection."""
    return Response(status_code=500, headers=NO_RETRY_HEADERS)
