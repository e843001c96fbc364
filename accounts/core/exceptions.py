"""App-wide failure taxonomy.

Every failure raised by domain code is an ``AppException`` tagged with a
``FailureKind``. Kinds carry no HTTP semantics here; the boundary mapper in
``accounts.core.exception_handlers`` decides status codes from the kind.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum


class FailureKind(str, Enum):
    """Closed set of failure categories."""

    validation = "validation_failure"
    conflict = "conflict_failure"
    not_found = "not_found_failure"
    persistence = "persistence_failure"
    unexpected = "unexpected_failure"


DEFAULT_MESSAGES: dict[FailureKind, str] = {
    FailureKind.validation: "Validation failed",
    FailureKind.conflict: "Resource conflict",
    FailureKind.not_found: "Resource not found",
    FailureKind.persistence: "A database error occurred",
    FailureKind.unexpected: "An unexpected error occurred",
}


@dataclass(frozen=True)
class Violation:
    """A single field-level validation problem.

    ``path`` uses dot notation into nested payloads (e.g. ``profile.fullName``)
    and ``type`` is a coarse category such as ``required``, ``format`` or
    ``enum``.
    """

    message: str
    path: str
    type: str

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class AppException(Exception):
    """Tagged application failure.

    Attributes:
        kind: Which branch of the taxonomy this failure belongs to.
        message: Human readable and returned to clients as is, so it must
            never embed driver or stack details.
        error_type: Finer grained machine readable code (defaults to the kind).
        details: Field violations, only meaningful for validation failures.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str | None = None,
        *,
        error_type: str | None = None,
        details: Iterable[Violation] = (),
    ):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.error_type = error_type or kind.value
        self.details: tuple[Violation, ...] = tuple(details)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"AppException(kind={self.kind.value!r}, "
            f"error_type={self.error_type!r}, message={self.message!r})"
        )


def validation_failure(
    violations: Iterable[Violation], message: str | None = None
) -> AppException:
    """Build a validation failure that reports every violation at once."""
    violations = tuple(violations)
    if message is None:
        message = "; ".join(
            f"{v.path}: {v.message}" if v.path else v.message for v in violations
        ) or DEFAULT_MESSAGES[FailureKind.validation]
    return AppException(FailureKind.validation, message, details=violations)


def persistence_failure(message: str | None = None) -> AppException:
    return AppException(FailureKind.persistence, message)
