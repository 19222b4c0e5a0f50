# Error taxonomy shared by the proxy endpoints and the scheduled job.

#   ConfigurationError        no Riot key could be resolved
#   UpstreamError             Riot answered with a non-2xx status
#   UpstreamUnavailableError  the request never completed (DNS, connection, timeout)
#   MalformedPayloadError     Riot answered 2xx with data we cannot ingest

from typing import Any

from rotation_watch.models import RateInfo


class RotationWatchError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(RotationWatchError):
    pass


class UpstreamError(RotationWatchError):
    """
    Non-2xx response from the Riot API.

    Carries everything needed to diagnose the failure by hand: the HTTP status,
    the rate-limit snapshot taken from the response headers, and a best-effort
    message extracted from the error body (already truncated).
    """

    def __init__(self, status: int, rate_info: RateInfo, upstream_message: str) -> None:
        super().__init__(f"Riot API responded {status}: {upstream_message}")
        self.status = status
        self.rate_info = rate_info
        self.upstream_message = upstream_message

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "rateInfo": self.rate_info.to_dict(),
            "upstreamMessage": self.upstream_message,
        }


class UpstreamUnavailableError(RotationWatchError):
    pass


class MalformedPayloadError(RotationWatchError):
    pass
