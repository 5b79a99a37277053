"""Application service for the shared create/edit user form."""

import logging

from user_sync.application.interfaces import ResourceClient
from user_sync.application.services.collection_store import CollectionStore
from user_sync.domain.entities import (
    DraftRecord,
    FormMode,
    FormState,
    UserRecord,
)

logger = logging.getLogger(__name__)


class FormController:
    """Two-mode state machine (CREATE / EDIT) driving a single draft buffer.

    ``submit`` sends the draft to the primary resource and reconciles the
    store with the server's answer. The form resets to CREATE with an empty
    draft only after that answer arrives; any failure propagates and leaves
    mode and draft exactly as they were.
    """

    def __init__(self, client: ResourceClient, store: CollectionStore):
        self._client = client
        self._store = store
        self._state = FormState.creating()

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def mode(self) -> FormMode:
        return self._state.mode

    @property
    def draft(self) -> DraftRecord:
        return self._state.draft

    def start_create(self) -> None:
        self._state = FormState.creating()

    def cancel_edit(self) -> None:
        """Leave EDIT mode without saving."""
        self.start_create()

    def start_edit(self, record: UserRecord) -> None:
        self._state = FormState.editing(record.id, DraftRecord.from_record(record))
        logger.debug("Editing user id=%s", record.id)

    def update_field(self, field_name: str, value: str) -> None:
        """Set one draft field. Unknown names raise UnknownFieldError."""
        draft = self._state.draft.with_field(field_name, value)
        self._state = FormState(
            mode=self._state.mode,
            target_id=self._state.target_id,
            draft=draft,
        )

    async def submit(self) -> UserRecord:
        state = self._state
        if state.mode is FormMode.EDIT:
            result = await self._client.update(state.target_id, state.draft)
            self._store.apply_update(state.target_id, result)
        else:
            result = await self._client.create(state.draft)
            self._store.insert(result)

        self._state = FormState.creating()
        return result
