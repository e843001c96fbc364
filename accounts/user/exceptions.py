"""User domain failures.

Factories for the failures user workflows raise. Each returns an
``AppException`` tagged with its ``FailureKind``; status codes are decided
by the exception handlers.
"""

import re

from sqlalchemy.exc import IntegrityError

from accounts.core.exceptions import AppException, FailureKind


def user_not_found(message: str = "User not found") -> AppException:
    return AppException(FailureKind.not_found, message, error_type="user_not_found")


def username_exists(message: str = "Username already exists") -> AppException:
    return AppException(FailureKind.conflict, message, error_type="username_exists")


def email_exists(message: str = "Email already exists") -> AppException:
    return AppException(FailureKind.conflict, message, error_type="email_exists")


def username_immutable(message: str = "Username cannot be changed") -> AppException:
    return AppException(
        FailureKind.conflict, message, error_type="username_immutable"
    )


# Unique indexes on ``users`` keyed by the column they protect.
_UNIQUE_INDEXES = {"ix_users_username": "username", "ix_users_email": "email"}

_COLUMN_PATTERNS = (
    re.compile(r"Key \((?P<column>\w+)\)="),
    re.compile(r"UNIQUE constraint failed: \w+\.(?P<column>\w+)"),
)


def violated_column(exc: IntegrityError) -> str | None:
    """Name the column whose unique constraint ``exc`` reports, if any.

    PostgreSQL drivers expose the constraint name on ``orig.diag`` and put
    ``Key (column)=(value)`` in the message; SQLite reports
    ``UNIQUE constraint failed: table.column``. Only the column part is read
    so a value that happens to contain a column name cannot mislead it.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint in _UNIQUE_INDEXES:
        return _UNIQUE_INDEXES[constraint]

    detail = str(exc.orig)
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(detail)
        if match:
            return match.group("column")
    return None


def conflict_from_integrity_error(exc: IntegrityError) -> AppException:
    """Translate a unique-constraint violation raised at insert/update time."""
    column = violated_column(exc)
    if column == "username":
        return username_exists()
    if column == "email":
        return email_exists()
    return AppException(
        FailureKind.conflict,
        "Username or email already exists",
        error_type="unique_violation",
    )
