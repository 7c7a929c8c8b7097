"""Slack request signature verification as a FastAPI dependency."""

import hmac
import logging

from fastapi import HTTPException, Request
from slack_sdk.signature import Clock, SignatureVerifier

from songlink_bot.config import get_settings
from songlink_bot.slack.responses import NO_RETRY_HEADERS

logger = logging.getLogger(__name__)


def is_valid_request(
    body: bytes,
    timestamp: str | None,
    signature: str | None,
    signing_secret: str,
    *,
    max_age_seconds: int = 300,
    clock: Clock | None = None,
) -> bool:
    """Check a Slack request signature over the exact bytes received.

    The signature is ``v0=`` + HMAC-SHA256 of ``v0:{timestamp}:{body}`` keyed
    by the signing secret. Requests whose timestamp is further than
    ``max_age_seconds`` from now are rejected to block replays.

    Never raises: missing headers, a non-integer timestamp, a non-ASCII
    signature, a body that is not UTF-8, or an unset signing secret all count
    as invalid.
    """
    if not signing_secret or not timestamp or not signature:
        return False
    # compare_digest only accepts ASCII str; headers arrive latin-1 decoded
    if not signature.isascii():
        return False

    try:
        issued_at = int(timestamp)
    except ValueError:
        return False

    now = (clock or Clock()).now()
    if abs(now - issued_at) > max_age_seconds:
        return False

    try:
        body_text = body.decode("utf-8")
    except UnicodeDecodeError:
        return False

    verifier = SignatureVerifier(signing_secret=signing_secret)
    expected = verifier.generate_signature(timestamp=timestamp, body=body_text)
    if expected is None:
        return False
    return hmac.compare_digest(expected, signature)


async def verify_slack_request(request: Request) -> bytes:
    """Verify the Slack request signature and return the raw body.

    Reads the raw body FIRST (before any JSON or form parsing) to ensure the
    signature verification uses the exact bytes Slack signed. Routes parse
    the returned bytes themselves since events, commands and interactions
    use different encodings.

    Raises HTTPException(403) if the signature is invalid or stale.
    """
    settings = get_settings()
    body = await request.body()

    timestamp = request.headers.get("X-Slack-Request-Timestamp")
    signature = request.headers.get("X-Slack-Signature")

    if not is_valid_request(
        body,
        timestamp,
        signature,
        settings.slack_signing_secret,
        max_age_seconds=settings.signature_max_age_seconds,
    ):
        logger.warning("Rejected Slack request to %s: invalid signature", request.url.path)
        raise HTTPException(
            status_code=403,
            detail="Invalid Slack signature",
            headers=NO_RETRY_HEADERS,
        )

    return body
