from .user_record import (
    DraftFieldUpdate,
    DraftResponse,
    UserRecordResponse,
    UserRecordSchema,
    describe_validation_error,
    parse_user,
    parse_user_list,
)
from .sync_state import (
    LoadStatusResponse,
    SurfacedErrorResponse,
    SyncStateResponse,
)

__all__ = [
    "DraftFieldUpdate",
    "DraftResponse",
    "UserRecordResponse",
    "UserRecordSchema",
    "describe_validation_error",
    "parse_user",
    "parse_user_list",
    "LoadStatusResponse",
    "SurfacedErrorResponse",
    "SyncStateResponse",
]
