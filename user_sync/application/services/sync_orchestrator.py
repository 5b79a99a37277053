"""Sync orchestrator — top-level driver for the user collections and the form.

Loads both remote collections, exposes the public operations (submit,
delete, form mode changes) and publishes an immutable SyncSnapshot after
every fully-applied transition.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager

from user_sync.application.interfaces import ResourceClient
from user_sync.application.services.collection_store import CollectionStore
from user_sync.application.services.form_controller import FormController
from user_sync.domain.entities import (
    FormMode,
    LoadStatus,
    RecordId,
    SurfacedError,
    SyncSnapshot,
    UserRecord,
)
from user_sync.domain.exceptions import (
    ErrorContext,
    MutationInProgressError,
    RecordNotFoundError,
    UserSyncError,
)
from user_sync.infrastructure.logging.sync_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)
slog = SyncLogger("SyncOrchestrator")

SnapshotListener = Callable[[SyncSnapshot], None]


class SyncOrchestrator:
    """Reconciles local state with the primary and read-only resources.

    Network and data failures never escape: each is turned into
    ``current_error`` for the action that failed. Only programming errors
    (unknown draft fields, overlapping mutations, editing a missing id)
    are raised to the caller.

    When both initial loads fail, the primary failure is the one surfaced
    as ``current_error``; each source's own failure stays visible in its
    LoadStatus.
    """

    def __init__(
        self,
        primary: ResourceClient,
        read_only: ResourceClient,
        store: CollectionStore | None = None,
        form: FormController | None = None,
    ):
        self._primary = primary
        self._read_only = read_only
        self._store = store or CollectionStore()
        self._form = form or FormController(primary, self._store)
        self._statuses: dict[ErrorContext, LoadStatus] = {
            ErrorContext.LIST_PRIMARY: LoadStatus.loading(),
            ErrorContext.LIST_READ_ONLY: LoadStatus.loading(),
        }
        self._load_errors: dict[ErrorContext, SurfacedError | None] = {}
        self._current_error: SurfacedError | None = None
        self._busy = False
        self._listeners: list[SnapshotListener] = []

    # ── State exposure ──────────────────────────────────────────────

    @property
    def snapshot(self) -> SyncSnapshot:
        collections = self._store.state
        return SyncSnapshot(
            primary_records=collections.primary,
            read_only_records=collections.read_only,
            primary_status=self._statuses[ErrorContext.LIST_PRIMARY],
            read_only_status=self._statuses[ErrorContext.LIST_READ_ONLY],
            current_error=self._current_error,
            form=self._form.state,
            is_busy=self._busy,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)

    def _fail(self, context: ErrorContext, exc: UserSyncError) -> None:
        self._current_error = SurfacedError.from_exception(context, exc)

    # ── Initial load ────────────────────────────────────────────────

    async def initialize(self) -> SyncSnapshot:
        """Load both collections concurrently.

        Each source updates its own collection and status as soon as it
        answers; ``is_loading`` clears only once both have finished.
        """
        self._statuses[ErrorContext.LIST_PRIMARY] = LoadStatus.loading()
        self._statuses[ErrorContext.LIST_READ_ONLY] = LoadStatus.loading()
        self._load_errors = {}
        self._publish()

        await asyncio.gather(
            self._load(
                ErrorContext.LIST_PRIMARY, self._primary, self._store.replace_primary
            ),
            self._load(
                ErrorContext.LIST_READ_ONLY, self._read_only, self._store.replace_read_only
            ),
        )
        return self.snapshot

    async def _load(
        self,
        context: ErrorContext,
        client: ResourceClient,
        apply: Callable[[Iterable[UserRecord]], None],
    ) -> None:
        try:
            with slog.timed_step(SyncStage.LOAD, f"Loading {context.value}"):
                records = await client.list_records()
                apply(records)
        except UserSyncError as exc:
            error = SurfacedError.from_exception(context, exc)
            self._statuses[context] = LoadStatus.failed(error.message)
            self._load_errors[context] = error
        else:
            self._statuses[context] = LoadStatus.ready()
            self._load_errors[context] = None

        # The load that clears is_loading also settles current_error, in the
        # same published snapshot.
        if not any(status.is_loading for status in self._statuses.values()):
            self._current_error = (
                self._load_errors.get(ErrorContext.LIST_PRIMARY)
                or self._load_errors.get(ErrorContext.LIST_READ_ONLY)
            )
        self._publish()

    # ── Form ────────────────────────────────────────────────────────

    def start_create(self) -> None:
        self._form.start_create()
        self._publish()

    def cancel_edit(self) -> None:
        self._form.cancel_edit()
        self._publish()

    def start_edit(self, record: UserRecord | RecordId) -> None:
        """Enter EDIT mode for a record, given either the record or its id."""
        if not isinstance(record, UserRecord):
            found = self._store.find(record)
            if found is None:
                raise RecordNotFoundError(record)
            record = found
        self._form.start_edit(record)
        self._publish()

    def update_field(self, field_name: str, value: str) -> None:
        self._form.update_field(field_name, value)
        self._publish()

    # ── Mutations ───────────────────────────────────────────────────

    @asynccontextmanager
    async def _mutation(self) -> AsyncIterator[None]:
        """Mark a create/update/delete as in flight; reject overlapping ones."""
        if self._busy:
            raise MutationInProgressError()
        self._busy = True
        self._publish()
        try:
            yield
        finally:
            self._busy = False
            self._publish()

    async def submit(self) -> UserRecord | None:
        """Send the draft (create or update). Returns the server record, or None on failure."""
        if self._form.mode is FormMode.EDIT:
            context, stage = ErrorContext.UPDATE, SyncStage.UPDATE
        else:
            context, stage = ErrorContext.CREATE, SyncStage.CREATE

        async with self._mutation():
            try:
                with slog.timed_step(stage, f"Submitting {context.value}"):
                    record = await self._form.submit()
            except UserSyncError as exc:
                self._fail(context, exc)
                return None
            self._current_error = None
            return record

    async def delete_record(self, record_id: RecordId) -> bool:
        """Delete on the server, then locally. Returns False when the delete failed."""
        async with self._mutation():
            try:
                with slog.timed_step(SyncStage.DELETE, "Deleting user", id=record_id):
                    await self._primary.delete(record_id)
            except UserSyncError as exc:
                self._fail(ErrorContext.DELETE, exc)
                return False

            self._store.remove(record_id)
            if self._form.state.target_id == record_id:
                slog.detail("Deleted record was being edited; form reset", id=record_id)
                self._form.start_create()
            self._current_error = None
            return True
