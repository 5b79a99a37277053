"""Pydantic DTOs (Data Transfer Objects) for user records on the wire."""

from typing import Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from user_sync.domain.entities import UserRecord, strip_scheme


class UserRecordSchema(BaseModel):
    """Shape of a user object returned by either remote resource.

    Unknown keys (jsonplaceholder also sends ``username``, ``address``,
    ``company``) are ignored.
    """

    id: int | str
    name: str
    email: str
    phone: str
    website: str

    @field_validator("website")
    @classmethod
    def _strip_website_scheme(cls, value: str) -> str:
        return strip_scheme(value)

    def to_entity(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            website=self.website,
        )


_USER_LIST = TypeAdapter(list[UserRecordSchema])


def parse_user(data: Any) -> UserRecord:
    """Validate one user object. Raises pydantic.ValidationError on mismatch."""
    return UserRecordSchema.model_validate(data).to_entity()


def parse_user_list(data: Any) -> list[UserRecord]:
    """Validate a JSON array of users. Raises pydantic.ValidationError on mismatch."""
    return [item.to_entity() for item in _USER_LIST.validate_python(data)]


def describe_validation_error(exc: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation failure."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class UserRecordResponse(BaseModel):
    """Schema returned to the presentation layer."""

    id: int | str
    name: str
    email: str
    phone: str
    website: str
    website_url: str

    model_config = {"from_attributes": True}


class DraftResponse(BaseModel):
    id: int | str | None
    name: str
    email: str
    phone: str
    website: str

    model_config = {"from_attributes": True}


class DraftFieldUpdate(BaseModel):
    """Schema for editing one field of the form draft."""

    field: Literal["name", "email", "phone", "website"] = Field(
        ..., examples=["name"],
    )
    value: str = Field(..., examples=["Annie"])
