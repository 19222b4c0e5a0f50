# Proxy for Riot's champion rotation endpoint. Clients never see the API key.

# Two surfaces share one fetch:
#   - callable: callers must carry an App Check token; failures become
#     HttpsError with a fixed error class chosen from the upstream status,
#     plus {status, rateInfo, upstreamMessage}
#   - legacy HTTP GET: failures are relayed with Riot's own status code

import logging
from dataclasses import dataclass, field
from typing import Any

from firebase_functions import https_fn

from rotation_watch.errors import (
    ConfigurationError,
    MalformedPayloadError,
    UpstreamError,
    UpstreamUnavailableError,
)
from rotation_watch.http_client import RiotClient
from rotation_watch.keys import KeyResolver

log = logging.getLogger(__name__)

Code = https_fn.FunctionsErrorCode

_STATUS_TO_CODE: dict[int, https_fn.FunctionsErrorCode] = {
    400: Code.INVALID_ARGUMENT,
    401: Code.UNAUTHENTICATED,
    403: Code.PERMISSION_DENIED,
    404: Code.NOT_FOUND,
    429: Code.RESOURCE_EXHAUSTED,
}


def error_code_for_status(status: int | None) -> https_fn.FunctionsErrorCode:
    """Everything not in the table, including a missing status, is INTERNAL."""
    if status is None:
        return Code.INTERNAL
    return _STATUS_TO_CODE.get(status, Code.INTERNAL)


def _internal_error(message: str) -> https_fn.HttpsError:
    return https_fn.HttpsError(
        code=Code.INTERNAL,
        message=message,
        details={"status": None, "rateInfo": None, "upstreamMessage": None},
    )


def require_attested_caller(req: https_fn.CallableRequest) -> None:
    """
    Reject callers that did not present an App Check token.

    The platform verifies the token and rejects invalid ones before the
    function runs; `req.app` is only populated for a verified token.
    """
    if req.app is None:
        log.warning("Rejecting callable request without App Check token")
        raise https_fn.HttpsError(
            code=Code.UNAUTHENTICATED,
            message="App Check token required",
        )


@dataclass
class ProxyResponse:
    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)


class RotationProxy:

    def __init__(self, client: RiotClient, keys: KeyResolver) -> None:
        self._client = client
        self._keys = keys

    async def _fetch(self) -> dict[str, Any]:
        api_key = self._keys.require()
        try:
            result = await self._client.fetch_rotation(api_key)
        except UpstreamError as exc:
            log.error(
                "Riot API error status=%s rate=%s message=%s",
                exc.status, exc.rate_info.to_dict(), exc.upstream_message,
            )
            raise
        except (UpstreamUnavailableError, MalformedPayloadError) as exc:
            log.error("Failed to reach Riot API: %s", exc)
            raise
        return result.payload

    async def call(self) -> dict[str, Any]:
        """Callable surface: the payload, or an HttpsError."""
        try:
            return await self._fetch()
        except UpstreamError as exc:
            raise https_fn.HttpsError(
                code=error_code_for_status(exc.status),
                message="Upstream Riot API error",
                details=exc.to_dict(),
            ) from exc
        except ConfigurationError as exc:
            log.error("Riot API key is not configured")
            raise _internal_error("Backend misconfiguration") from exc
        except (UpstreamUnavailableError, MalformedPayloadError) as exc:
            raise _internal_error("Failed to contact Riot API") from exc

    async def get(self, method: str) -> ProxyResponse:
        """Legacy HTTP surface: raw JSON and raw upstream status codes."""
        if method != "GET":
            return ProxyResponse(405, {"error": "Only GET is supported"}, {"Allow": "GET"})

        try:
            payload = await self._fetch()
        except UpstreamError as exc:
            return ProxyResponse(exc.status, {"error": "Upstream Riot API error", **exc.to_dict()})
        except (UpstreamUnavailableError, MalformedPayloadError):
            return ProxyResponse(500, {"error": "Failed to contact Riot API"})
        except ConfigurationError:
            log.error("Riot API key is not configured")
            return ProxyResponse(500, {"error": "Backend misconfiguration"})

        return ProxyResponse(200, payload)
