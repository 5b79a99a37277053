"""Domain entity — the immutable view of sync state handed to the presentation layer."""

from dataclasses import dataclass, field
from enum import Enum

from user_sync.domain.exceptions import ErrorContext

from .form_state import FormMode, FormState
from .load_status import LoadStatus
from .user_record import DraftRecord, RecordId, UserRecord


class ViewState(str, Enum):
    """What the presentation layer should show: a spinner, the error, or the data."""

    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class SurfacedError:
    """The single user-visible error, scoped to the most recent failing action."""

    context: ErrorContext
    message: str
    detail: str | None = None

    @classmethod
    def from_exception(cls, context: ErrorContext, exc: Exception) -> "SurfacedError":
        return cls(context=context, message=context.user_message, detail=str(exc))


@dataclass(frozen=True)
class SyncSnapshot:
    primary_records: tuple[UserRecord, ...] = ()
    read_only_records: tuple[UserRecord, ...] = ()
    primary_status: LoadStatus = field(default_factory=LoadStatus.loading)
    read_only_status: LoadStatus = field(default_factory=LoadStatus.loading)
    current_error: SurfacedError | None = None
    form: FormState = field(default_factory=FormState.creating)
    is_busy: bool = False

    @property
    def is_loading(self) -> bool:
        """True until both collections have finished loading, successfully or not."""
        return self.primary_status.is_loading or self.read_only_status.is_loading

    @property
    def form_mode(self) -> FormMode:
        return self.form.mode

    @property
    def edit_target_id(self) -> RecordId | None:
        return self.form.target_id

    @property
    def draft(self) -> DraftRecord:
        return self.form.draft

    @property
    def view(self) -> ViewState:
        if self.is_loading:
            return ViewState.LOADING
        if self.current_error is not None:
            return ViewState.ERROR
        return ViewState.READY
