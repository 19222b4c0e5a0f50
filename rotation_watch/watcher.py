# RotationWatcher: one tick of the scheduled champion rotation poll.

# responsibilities:
#   - resolve the Riot key and fetch the current rotation
#   - validate the payload before anything is persisted
#   - compare its signature with the stored one
#   - on change, conditionally replace the stored record, then publish
#
# Every failure before the write ends the tick without touching state. There
# is no caller to report to, so outcomes are logged and returned. The next
# tick is the retry.

import logging

from rotation_watch.differ import RotationTracker
from rotation_watch.errors import MalformedPayloadError, UpstreamError, UpstreamUnavailableError
from rotation_watch.http_client import RiotClient
from rotation_watch.keys import KeyResolver
from rotation_watch.models import JobOutcome, format_dt
from rotation_watch.notifier import TopicNotifier
from rotation_watch.store import RotationStore


class RotationWatcher:
    """
    Runs a single poll. Safe to invoke repeatedly: once a rotation has been
    written, further ticks with the same upstream rotation are no-ops.

    A store write failure is not caught. It propagates so the platform marks
    the run as failed, and nothing is published for a write that did not
    happen. A publish failure after a successful write is logged only; the
    write stands.
    """

    def __init__(
        self,
        client: RiotClient,
        keys: KeyResolver,
        store: RotationStore,
        notifier: TopicNotifier,
        tracker: RotationTracker | None = None,
    ) -> None:
        self._client = client
        self._keys = keys
        self._store = store
        self._notifier = notifier
        self._tracker = tracker or RotationTracker()
        self._log = logging.getLogger("watcher.rotation")

    async def run_once(self) -> JobOutcome:
        api_key = self._keys.resolve()
        if not api_key:
            self._log.error("Riot API key is not configured; skipping this run")
            return JobOutcome.MISSING_KEY

        try:
            result = await self._client.fetch_rotation(api_key)
        except UpstreamError as exc:
            self._log.error(
                "Riot API error status=%s rate=%s message=%s",
                exc.status, exc.rate_info.to_dict(), exc.upstream_message,
            )
            return JobOutcome.UPSTREAM_FAILED
        except UpstreamUnavailableError as exc:
            self._log.error("Riot API unreachable: %s", exc)
            return JobOutcome.UPSTREAM_FAILED
        except MalformedPayloadError as exc:
            self._log.error("Riot API returned an unusable body: %s", exc)
            return JobOutcome.MALFORMED_PAYLOAD

        try:
            record = self._tracker.build_record(result.payload)
        except MalformedPayloadError as exc:
            self._log.error("Rejecting rotation payload: %s", exc)
            return JobOutcome.MALFORMED_PAYLOAD

        stored = self._store.read()
        change = self._tracker.diff(record, stored)

        if change is None:
            self._log.info(
                "Rotation unchanged (%s), last updated %s",
                record.signature, format_dt(stored.updated_at if stored else None),
            )
            return JobOutcome.UNCHANGED

        if not self._store.replace_if_current(change.record, change.previous_signature):
            self._log.info("Another run already stored a newer rotation; not publishing")
            return JobOutcome.SUPERSEDED

        self._log.info(
            "Rotation changed %r -> %r (rate=%s)",
            change.previous_signature, change.record.signature, result.rate_info.to_dict(),
        )

        try:
            self._notifier.publish_rotation_changed()
        except Exception as exc:
            self._log.exception("Rotation stored but notification failed: %s", exc)
            return JobOutcome.UPDATED_NOTIFY_FAILED

        return JobOutcome.UPDATED
