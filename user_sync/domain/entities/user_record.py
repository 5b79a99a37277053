"""Domain entities — user records held locally and the form's draft buffer."""

from dataclasses import dataclass, fields, replace
from typing import Any

from user_sync.domain.exceptions import UnknownFieldError

RecordId = int | str

EDITABLE_FIELDS: tuple[str, ...] = ("name", "email", "phone", "website")

_SCHEMES = ("https://", "http://")


def strip_scheme(website: str) -> str:
    """Drop a leading http(s):// so websites are stored bare."""
    value = website.strip()
    lowered = value.lower()
    for scheme in _SCHEMES:
        if lowered.startswith(scheme):
            return value[len(scheme):]
    return value


@dataclass(frozen=True)
class UserRecord:
    """A user confirmed by the server. The id is assigned remotely and never changes."""

    id: RecordId
    name: str
    email: str
    phone: str
    website: str

    @property
    def website_url(self) -> str:
        return f"http://{self.website}" if self.website else ""


@dataclass(frozen=True)
class DraftRecord:
    """The form's pending buffer — a UserRecord-shaped value that may lack an id.

    Frozen, so edits produce a new draft and a stored UserRecord can never be
    changed through it.
    """

    id: RecordId | None = None
    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""

    @classmethod
    def empty(cls) -> "DraftRecord":
        return cls()

    @classmethod
    def from_record(cls, record: UserRecord) -> "DraftRecord":
        return cls(**{f.name: getattr(record, f.name) for f in fields(cls)})

    def with_field(self, field_name: str, value: str) -> "DraftRecord":
        if field_name not in EDITABLE_FIELDS:
            raise UnknownFieldError(field_name)
        if field_name == "website":
            value = strip_scheme(value)
        return replace(self, **{field_name: value})

    def to_payload(self) -> dict[str, Any]:
        """Request body for create/update — the editable fields only."""
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}
