from dataclasses import dataclass
from typing import Any

from rotation_watch.models import RotationRecord
from rotation_watch.parser import compute_signature_from_ids, parse_free_champion_ids


@dataclass
class RotationChange:
    previous_signature: str | None
    record: RotationRecord


class RotationTracker:
    """
    Decides whether the freshly fetched rotation differs from the stored one.

    Why compare signatures instead of the payloads?

    Riot does not guarantee the order of freeChampionIds, and the rest of the
    payload (new-player pool, level cap) is not what subscribers care about.
    The sorted, comma-joined id list is a cheap canonical form: equal
    rotations always yield equal strings, whatever order Riot sent them in.

    A missing stored record counts as signature None, which never equals a
    computed signature, so the very first run always reports a change.
    """

    def build_record(self, payload: dict[str, Any]) -> RotationRecord:
        """Raises MalformedPayloadError if the ids cannot be ingested."""
        ids = parse_free_champion_ids(payload)
        return RotationRecord(
            signature=compute_signature_from_ids(ids),
            free_champion_ids=ids,
            raw_response=payload,
        )

    def diff(self, record: RotationRecord, stored: RotationRecord | None) -> RotationChange | None:
        """Return the change to persist, or None when the signatures match."""
        previous = stored.signature if stored is not None else None
        if previous == record.signature:
            return None
        return RotationChange(previous_signature=previous, record=record)
