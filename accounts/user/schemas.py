"""User domain schemas.

Request and response schemas for user operations. JSON payloads use
camelCase keys (``fullName``, ``lastLogin``); Python attributes stay
snake_case.

Security notes:
- No read schema declares ``password``; hashes never leave the service.
- Username is absent from ``UserUpdate``; the router rejects it before
  the body is validated.
"""

from datetime import UTC, date, datetime
from typing import Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    field_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from accounts.user.models import UserRole, UserStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def serialize_utc(value: datetime | None) -> str | None:
    """Format datetime as ISO 8601 string in UTC with a Z suffix.

    Naive datetimes are assumed to already be UTC (see TimestampMixin).
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    else:
        value = value.replace(tzinfo=UTC)
    return value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


# --- Requests ---


class ProfileCreate(CamelModel):
    full_name: str = Field(min_length=1, max_length=255)
    date_of_birth: date | None = None
    profile_picture_url: HttpUrl | None = None
    phone_number: str | None = Field(default=None, max_length=50)
    address_line: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)

    @field_serializer("profile_picture_url")
    def serialize_url(self, value: HttpUrl | None) -> str | None:
        return str(value) if value is not None else None


class UserCreate(CamelModel):
    """Schema for the user creation workflow."""

    username: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.user
    status: UserStatus = UserStatus.active
    last_login: datetime | None = None
    profile: ProfileCreate


class UserUpdate(CamelModel):
    """Partial update of user fields.

    Only keys present in the payload are applied. ``lastLogin`` may be set to
    null; the other fields may be omitted but not nulled.
    """

    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRole | None = None
    status: UserStatus | None = None
    last_login: datetime | None = None

    @model_validator(mode="after")
    def reject_nulls(self) -> Self:
        for name in ("email", "password", "role", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


# --- Responses ---


class UserRead(CamelModel):
    id: int
    username: str
    email: str
    role: UserRole
    status: UserStatus
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @field_serializer("last_login", "created_at", "updated_at", "deleted_at")
    def serialize_datetime(self, value: datetime | None) -> str | None:
        return serialize_utc(value)


class ProfileRead(CamelModel):
    id: int
    user_id: int
    full_name: str
    date_of_birth: date | None = None
    profile_picture_url: str | None = None
    phone_number: str | None = None
    address_line: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @field_serializer("created_at", "updated_at", "deleted_at")
    def serialize_datetime(self, value: datetime | None) -> str | None:
        return serialize_utc(value)


class UserWithProfileRead(CamelModel):
    """Composite returned by creation and the profile lookup."""

    user: UserRead
    profile: ProfileRead | None


class ExistsResponse(CamelModel):
    exists: bool


class DeletedUserRef(CamelModel):
    id: int
    deleted_at: datetime

    @field_serializer("deleted_at")
    def serialize_datetime(self, value: datetime) -> str | None:
        return serialize_utc(value)


class DeleteResponse(CamelModel):
    status: Literal["success"] = "success"
    status_code: int = 200
    message: str
    user: DeletedUserRef | None = None
