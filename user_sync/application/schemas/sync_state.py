"""Pydantic DTOs describing the sync snapshot for the presentation layer."""

from pydantic import BaseModel

from user_sync.domain.entities import FormMode, LoadState, SyncSnapshot, ViewState
from user_sync.domain.exceptions import ErrorContext

from .user_record import DraftResponse, UserRecordResponse


class LoadStatusResponse(BaseModel):
    state: LoadState
    error: str | None = None

    model_config = {"from_attributes": True}


class SurfacedErrorResponse(BaseModel):
    context: ErrorContext
    message: str
    detail: str | None = None

    model_config = {"from_attributes": True}


class SyncStateResponse(BaseModel):
    """Everything the UI renders: both tables, load state, error and form."""

    view: ViewState
    is_loading: bool
    is_busy: bool
    primary_records: list[UserRecordResponse]
    read_only_records: list[UserRecordResponse]
    primary_status: LoadStatusResponse
    read_only_status: LoadStatusResponse
    current_error: SurfacedErrorResponse | None
    form_mode: FormMode
    edit_target_id: int | str | None
    draft: DraftResponse

    @classmethod
    def from_snapshot(cls, snapshot: SyncSnapshot) -> "SyncStateResponse":
        return cls.model_validate(snapshot, from_attributes=True)
