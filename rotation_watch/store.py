# Firestore adapter for the single rotation document.

# The document is always replaced wholesale (set without merge), so a record
# read back never mixes fields from two different rotations.
#
# replace_if_current() is the write path used by the scheduled job: it runs
# the compare-and-set inside a Firestore transaction, keyed on the signature
# the job read earlier. If two ticks overlap, only the first one writes and
# only that one goes on to publish.
#
# Both read paths use _stored_signature(), so a document without a usable
# signature counts as "no record" everywhere and the next write replaces it.

import logging
from typing import Any

from firebase_admin import firestore

from rotation_watch.config import ROTATION_COLLECTION, ROTATION_DOCUMENT
from rotation_watch.models import RotationRecord

log = logging.getLogger(__name__)


def _stored_signature(snapshot: Any) -> str | None:
    """Signature of a snapshot; None when the document or its signature is missing."""
    if not snapshot.exists:
        return None
    signature = (snapshot.to_dict() or {}).get("signature")
    return signature if isinstance(signature, str) else None


class RotationStore:

    def __init__(
        self,
        client: Any,
        collection: str = ROTATION_COLLECTION,
        document: str = ROTATION_DOCUMENT,
    ) -> None:
        self._ref = client.collection(collection).document(document)
        self._client = client

    def read(self) -> RotationRecord | None:
        snapshot = self._ref.get()
        if _stored_signature(snapshot) is None:
            if snapshot.exists:
                log.warning("Stored rotation document has no signature; treating it as absent")
            return None
        return RotationRecord.from_document(snapshot.to_dict() or {})

    def write(self, record: RotationRecord) -> None:
        self._ref.set(record.to_document(firestore.SERVER_TIMESTAMP))

    def replace_if_current(self, record: RotationRecord, expected_signature: str | None) -> bool:
        """
        Write `record` only if the stored signature still equals
        `expected_signature` (None meaning "no document yet").

        Returns True if the write happened.
        """
        transaction = self._client.transaction()
        return firestore.transactional(self._replace_in)(transaction, record, expected_signature)

    def _replace_in(self, transaction: Any, record: RotationRecord, expected_signature: str | None) -> bool:
        snapshot = self._ref.get(transaction=transaction)
        current = _stored_signature(snapshot)

        if current != expected_signature:
            log.info(
                "Stored signature moved from %r to %r since it was read; skipping write",
                expected_signature, current,
            )
            return False

        transaction.set(self._ref, record.to_document(firestore.SERVER_TIMESTAMP))
        return True
