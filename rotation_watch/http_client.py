# Riot API client for the champion rotation endpoint.

# One GET per call, never retried: the proxy answers a live caller and the
# scheduled job simply tries again on its next tick. Rate-limit headers are
# captured on every response, success or not.

import asyncio
import json
import logging
from typing import Any

import aiohttp

from rotation_watch.config import MAX_UPSTREAM_MESSAGE_LEN, RIOT_TOKEN_HEADER, ROTATION_URL
from rotation_watch.errors import MalformedPayloadError, UpstreamError, UpstreamUnavailableError
from rotation_watch.models import FetchResult, RateInfo

log = logging.getLogger(__name__)


def extract_upstream_message(body: str, limit: int = MAX_UPSTREAM_MESSAGE_LEN) -> str:
    """
    Best-effort human-readable message from a Riot error body.

    Riot errors look like {"status": {"message": ..., "status_code": ...}}.
    Preference: status.message, then a top-level message, then the whole JSON
    document re-serialized. Bodies that are not JSON are returned as raw text;
    bytes that are not valid in the declared charset become U+FFFD.
    """
    try:
        parsed = json.loads(body)
    except ValueError:
        return body[:limit]

    message: Any = None
    if isinstance(parsed, dict):
        status = parsed.get("status")
        if isinstance(status, dict):
            message = status.get("message")
        message = message or parsed.get("message")
    if not message:
        message = json.dumps(parsed, separators=(",", ":"), ensure_ascii=False)
    return str(message)[:limit]


class RiotClient:
    """
    Wraps an aiohttp.ClientSession for the rotation endpoint.

    The session is owned by the caller (one per invocation); this class holds
    no state beyond the URL.
    """

    def __init__(self, session: aiohttp.ClientSession, url: str = ROTATION_URL) -> None:
        self._session = session
        self.url = url

    async def fetch_rotation(self, api_key: str) -> FetchResult:
        """
        Fetch the current champion rotation.

        Raises:
            UpstreamError             on any non-2xx response
            UpstreamUnavailableError  when the request cannot complete
            MalformedPayloadError     when a 2xx body is not a JSON object
        """
        try:
            async with self._session.get(self.url, headers={RIOT_TOKEN_HEADER: api_key}) as resp:
                rate_info = RateInfo.from_headers(resp.headers)

                if not 200 <= resp.status < 300:
                    body = await resp.text(errors="replace")
                    raise UpstreamError(resp.status, rate_info, extract_upstream_message(body))

                try:
                    payload = await resp.json(content_type=None)
                except ValueError as exc:
                    raise MalformedPayloadError(f"Riot returned invalid JSON: {exc}") from exc

        except aiohttp.ClientError as exc:
            log.warning("Failed to reach Riot API at %s: %s", self.url, exc)
            raise UpstreamUnavailableError(f"Failed to contact Riot API: {exc}") from exc
        except asyncio.TimeoutError as exc:
            log.warning("Timeout fetching %s", self.url)
            raise UpstreamUnavailableError("Timed out contacting Riot API") from exc

        if not isinstance(payload, dict):
            raise MalformedPayloadError(
                f"Riot returned {type(payload).__name__}, expected a JSON object"
            )

        log.debug("Fetched rotation from %s (rate=%s)", self.url, rate_info.to_dict())
        return FetchResult(payload=payload, rate_info=rate_info)
