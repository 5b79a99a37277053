"""Domain-specific exceptions — framework-independent."""

from enum import Enum


class ErrorContext(str, Enum):
    """The user-facing action a failure belongs to."""

    LIST_PRIMARY = "list_primary"
    LIST_READ_ONLY = "list_read_only"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def user_message(self) -> str:
        return _USER_MESSAGES[self]


_USER_MESSAGES = {
    ErrorContext.LIST_PRIMARY: "Failed to load local users. Please try again later.",
    ErrorContext.LIST_READ_ONLY: "Failed to load placeholder users. Please try again later.",
    ErrorContext.CREATE: "Failed to add user. Please try again later.",
    ErrorContext.UPDATE: "Failed to update user. Please try again later.",
    ErrorContext.DELETE: "Failed to delete user. Please try again later.",
}


class UserSyncError(Exception):
    """Base class for every error raised by the sync core."""


class NetworkError(UserSyncError):
    """Raised when a remote call fails at transport level or with a non-2xx status."""

    def __init__(
        self,
        context: ErrorContext,
        message: str,
        status_code: int | None = None,
    ):
        self.context = context
        self.message = message
        self.status_code = status_code
        prefix = f"[{context.value}]"
        if status_code is not None:
            prefix += f" {status_code}"
        super().__init__(f"{prefix}: {message}")


class MalformedResponseError(UserSyncError):
    """Raised when a server response does not match the user record shape."""

    def __init__(self, context: ErrorContext, detail: str):
        self.context = context
        self.detail = detail
        super().__init__(f"[{context.value}] malformed response: {detail}")


class DuplicateRecordError(UserSyncError):
    """Raised when a collection would end up holding two records with the same id."""

    def __init__(self, record_id: int | str):
        self.record_id = record_id
        super().__init__(f"UserRecord with id '{record_id}' already exists")


class RecordNotFoundError(UserSyncError):
    """Raised when a requested record is not in the primary collection."""

    def __init__(self, record_id: int | str):
        self.record_id = record_id
        super().__init__(f"UserRecord with id '{record_id}' not found")


class ReadOnlyResourceError(UserSyncError):
    """Raised when a mutation is attempted against the read-only resource."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"'{operation}' is not allowed on a read-only resource")


class MutationInProgressError(UserSyncError):
    """Raised when a mutation starts while another one is still in flight."""

    def __init__(self) -> None:
        super().__init__("Another create/update/delete request is still in flight")


class UnknownFieldError(UserSyncError, ValueError):
    """Raised when the form is asked to edit a field that does not exist."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Unknown draft field '{field_name}'")
