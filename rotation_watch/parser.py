# Turns a Riot champion-rotation payload into the canonical rotation signature.

# Two entry points with different strictness:
#   - compute_signature() does not raise on absent, null or non-list ids;
#     they give the empty signature.
#   - parse_free_champion_ids() is the ingestion check used before anything is
#     persisted. A missing or malformed field raises MalformedPayloadError, so
#     "malformed payload" is never recorded as "no free champions".

from typing import Any

from rotation_watch.errors import MalformedPayloadError

FREE_CHAMPION_IDS = "freeChampionIds"


def compute_signature_from_ids(ids: list[int]) -> str:
    """Comma-joined ascending ids. Input order does not matter."""
    return ",".join(str(i) for i in sorted(ids))


def compute_signature(payload: Any) -> str:
    ids = payload.get(FREE_CHAMPION_IDS) if isinstance(payload, dict) else None
    if not isinstance(ids, list):
        ids = []
    return compute_signature_from_ids(list(ids))


def parse_free_champion_ids(payload: Any) -> list[int]:
    """
    Validate and return the free champion ids, sorted ascending.

    An empty list is valid. bool is rejected even though it subclasses int.
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(payload).__name__}")

    if FREE_CHAMPION_IDS not in payload:
        raise MalformedPayloadError(f"payload has no {FREE_CHAMPION_IDS!r} field")

    ids = payload[FREE_CHAMPION_IDS]
    if not isinstance(ids, list):
        raise MalformedPayloadError(
            f"{FREE_CHAMPION_IDS!r} is {type(ids).__name__}, expected a list"
        )

    bad = [i for i in ids if isinstance(i, bool) or not isinstance(i, int)]
    if bad:
        raise MalformedPayloadError(f"{FREE_CHAMPION_IDS!r} has non-integer entries: {bad[:5]!r}")

    return sorted(ids)
