import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping


def format_dt(dt: datetime | None) -> str:
    """Human-readable UTC timestamp for log lines."""
    if dt is None:
        return "never"
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


@dataclass(frozen=True)
class RateInfo:
    """
    Rate-limit snapshot taken from one Riot response.

    Riot reports limits per application key and per method, each as a
    "limit:window" list plus the current count. The values are kept as the
    raw header strings; they are only ever logged or echoed back to callers.
    """
    app: str | None = None
    app_count: str | None = None
    method: str | None = None
    method_count: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateInfo":
        return cls(
            app=headers.get("X-App-Rate-Limit"),
            app_count=headers.get("X-App-Rate-Limit-Count"),
            method=headers.get("X-Method-Rate-Limit"),
            method_count=headers.get("X-Method-Rate-Limit-Count"),
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "app": self.app,
            "appCount": self.app_count,
            "method": self.method,
            "methodCount": self.method_count,
        }


@dataclass
class FetchResult:
    payload: dict[str, Any]
    rate_info: RateInfo


@dataclass
class RotationRecord:
    """
    The single persisted rotation document.

    `signature` is always the comma-joined form of the ascending
    `free_champion_ids` (see differ.RotationTracker). It is written as a
    full replacement; `updated_at` is assigned by the server on write and is
    only populated on records read back from the store.
    """
    signature: str
    free_champion_ids: list[int]
    raw_response: dict[str, Any]
    updated_at: datetime | None = field(default=None, compare=False)

    @classmethod
    def from_document(cls, data: Mapping[str, Any]) -> "RotationRecord":
        return cls(
            signature=data.get("signature", ""),
            free_champion_ids=list(data.get("freeChampionIds") or []),
            raw_response=dict(data.get("rawResponse") or {}),
            updated_at=data.get("updatedAt"),
        )

    def to_document(self, updated_at: Any) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "freeChampionIds": list(self.free_champion_ids),
            "rawResponse": self.raw_response,
            "updatedAt": updated_at,
        }


class JobOutcome(str, enum.Enum):
    """How one scheduled tick ended."""
    MISSING_KEY = "missing-key"
    UPSTREAM_FAILED = "upstream-failed"
    MALFORMED_PAYLOAD = "malformed-payload"
    UNCHANGED = "unchanged"
    SUPERSEDED = "superseded"          # another tick wrote first
    UPDATED = "updated"
    UPDATED_NOTIFY_FAILED = "updated-notify-failed"
