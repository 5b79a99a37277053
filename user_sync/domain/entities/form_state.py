"""Domain entity for the create/edit form state machine."""

from dataclasses import dataclass, field
from enum import Enum

from .user_record import DraftRecord, RecordId


class FormMode(str, Enum):
    """Which action the shared form performs on submit."""

    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class FormState:
    """Immutable form snapshot. ``target_id`` is set only in EDIT mode."""

    mode: FormMode = FormMode.CREATE
    target_id: RecordId | None = None
    draft: DraftRecord = field(default_factory=DraftRecord.empty)

    @classmethod
    def creating(cls) -> "FormState":
        return cls()

    @classmethod
    def editing(cls, target_id: RecordId, draft: DraftRecord) -> "FormState":
        return cls(mode=FormMode.EDIT, target_id=target_id, draft=draft)
