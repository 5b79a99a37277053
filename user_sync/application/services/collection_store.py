"""In-memory state container for the primary and read-only user collections."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from user_sync.domain.entities import RecordId, UserRecord
from user_sync.domain.exceptions import DuplicateRecordError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionState:
    """Immutable snapshot of both collections, in server order."""

    primary: tuple[UserRecord, ...] = ()
    read_only: tuple[UserRecord, ...] = ()

    def find_primary(self, record_id: RecordId) -> UserRecord | None:
        for record in self.primary:
            if record.id == record_id:
                return record
        return None


def _unique(records: Iterable[UserRecord]) -> tuple[UserRecord, ...]:
    result = tuple(records)
    seen: set[RecordId] = set()
    for record in result:
        if record.id in seen:
            raise DuplicateRecordError(record.id)
        seen.add(record.id)
    return result


# ── Transitions ─────────────────────────────────────────────────────
#
# Pure functions: each takes a snapshot and returns a new one. They never
# mutate their input, so a snapshot handed to the presentation layer stays
# valid forever.

def with_primary(state: CollectionState, records: Iterable[UserRecord]) -> CollectionState:
    return replace(state, primary=_unique(records))


def with_read_only(state: CollectionState, records: Iterable[UserRecord]) -> CollectionState:
    return replace(state, read_only=_unique(records))


def with_inserted(state: CollectionState, record: UserRecord) -> CollectionState:
    if state.find_primary(record.id) is not None:
        raise DuplicateRecordError(record.id)
    return replace(state, primary=state.primary + (record,))


def without(state: CollectionState, record_id: RecordId) -> CollectionState:
    remaining = tuple(r for r in state.primary if r.id != record_id)
    if len(remaining) == len(state.primary):
        return state
    return replace(state, primary=remaining)


def with_updated(
    state: CollectionState, record_id: RecordId, record: UserRecord
) -> CollectionState:
    if state.find_primary(record_id) is None:
        return state
    if record.id != record_id and state.find_primary(record.id) is not None:
        raise DuplicateRecordError(record.id)
    return replace(
        state,
        primary=tuple(record if r.id == record_id else r for r in state.primary),
    )


class CollectionStore:
    """Holds the current CollectionState and swaps it on each transition.

    Performs no I/O; callers apply only server-confirmed results. The
    read-only collection is touched by ``replace_read_only`` and nothing else.
    """

    def __init__(self, state: CollectionState | None = None) -> None:
        self._state = state or CollectionState()

    @property
    def state(self) -> CollectionState:
        return self._state

    @property
    def primary(self) -> tuple[UserRecord, ...]:
        return self._state.primary

    @property
    def read_only(self) -> tuple[UserRecord, ...]:
        return self._state.read_only

    def find(self, record_id: RecordId) -> UserRecord | None:
        return self._state.find_primary(record_id)

    def replace_primary(self, records: Iterable[UserRecord]) -> None:
        self._state = with_primary(self._state, records)
        logger.debug("Primary collection replaced (%d records)", len(self._state.primary))

    def replace_read_only(self, records: Iterable[UserRecord]) -> None:
        self._state = with_read_only(self._state, records)
        logger.debug("Read-only collection replaced (%d records)", len(self._state.read_only))

    def insert(self, record: UserRecord) -> None:
        self._state = with_inserted(self._state, record)

    def remove(self, record_id: RecordId) -> None:
        new_state = without(self._state, record_id)
        if new_state is self._state:
            logger.debug("remove(%s): id not present, nothing to do", record_id)
        self._state = new_state

    def apply_update(self, record_id: RecordId, record: UserRecord) -> None:
        new_state = with_updated(self._state, record_id, record)
        if new_state is self._state:
            logger.debug("apply_update(%s): id not present, nothing to do", record_id)
        self._state = new_state
