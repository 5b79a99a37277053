from .user_record import (
    EDITABLE_FIELDS,
    DraftRecord,
    RecordId,
    UserRecord,
    strip_scheme,
)
from .form_state import FormMode, FormState
from .load_status import LoadState, LoadStatus
from .sync_snapshot import SurfacedError, SyncSnapshot, ViewState

__all__ = [
    "EDITABLE_FIELDS",
    "DraftRecord",
    "RecordId",
    "UserRecord",
    "strip_scheme",
    "FormMode",
    "FormState",
    "LoadState",
    "LoadStatus",
    "SurfacedError",
    "SyncSnapshot",
    "ViewState",
]
