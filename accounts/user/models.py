"""User domain models.

SQLModel table definitions for User and UserProfile. Username and email
carry database unique constraints; the service's pre-flight existence checks
are only a fast path in front of them.
"""

from datetime import date, datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from accounts.core.mixins import SoftDeleteMixin, TimestampMixin


class UserRole(str, Enum):
    admin = "admin"
    manager = "manager"
    user = "user"


class UserStatus(str, Enum):
    """User account status.

    - active: account usable
    - inactive: deactivated
    - suspended: blocked by an administrator
    """

    active = "active"
    inactive = "inactive"
    suspended = "suspended"


class User(TimestampMixin, SoftDeleteMixin, SQLModel, table=True):
    """User database model.

    Note: password holds a hash and must never be exposed in API responses.
    """

    __tablename__: str = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True, max_length=255)
    email: str = Field(index=True, unique=True, max_length=255)
    password: str = Field(max_length=255)
    role: UserRole = Field(default=UserRole.user, max_length=20)
    status: UserStatus = Field(default=UserStatus.active, max_length=20)
    last_login: datetime | None = Field(default=None)


class UserProfile(TimestampMixin, SoftDeleteMixin, SQLModel, table=True):
    """Profile row, one-to-one with User.

    Only created by the user creation workflow, in the same transaction as
    its owner.
    """

    __tablename__: str = "user_profiles"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    full_name: str = Field(max_length=255)
    date_of_birth: date | None = Field(default=None)
    profile_picture_url: str | None = Field(default=None, max_length=2048)
    phone_number: str | None = Field(default=None, max_length=50)
    address_line: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
