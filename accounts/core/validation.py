"""Schema validation helpers.

Payload schemas are declarative pydantic models. This module converts
pydantic's itemised errors into ``Violation`` records so that every problem
in a payload is reported together, and exposes a helper for validating raw
data outside of FastAPI's request parsing.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from accounts.core.exceptions import AppException, Violation, validation_failure

# Location prefixes FastAPI adds to request errors.
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}

_CATEGORIES: dict[str, str] = {
    "missing": "required",
    "enum": "enum",
    "literal_error": "enum",
    "value_error": "format",
    "url_parsing": "format",
    "url_scheme": "format",
    "url_syntax_violation": "format",
    "url_too_long": "format",
    "date_parsing": "format",
    "date_from_datetime_parsing": "format",
    "date_from_datetime_inexact": "format",
    "datetime_parsing": "format",
    "datetime_from_date_parsing": "format",
    "string_too_short": "length",
    "string_too_long": "length",
    "string_type": "type",
    "int_type": "type",
    "int_parsing": "type",
    "bool_type": "type",
    "bool_parsing": "type",
    "date_type": "type",
    "datetime_type": "type",
    "url_type": "type",
    "dict_type": "type",
    "model_type": "type",
    "model_attributes_type": "type",
    "json_invalid": "json",
    "json_type": "json",
}


def error_category(error_type: str) -> str:
    """Map a pydantic error type to a violation category."""
    return _CATEGORIES.get(error_type, error_type)


def error_path(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[Violation]:
    """Convert pydantic/FastAPI error dicts into violations, preserving order."""
    return [
        Violation(
            message=str(error.get("msg", "Invalid value")),
            path=error_path(error.get("loc", ())),
            type=error_category(str(error.get("type", "invalid"))),
        )
        for error in errors
    ]


M = TypeVar("M", bound=BaseModel)


def validate_payload(schema: type[M], payload: Any) -> M:
    """Validate raw data against ``schema``.

    Raises:
        AppException: validation failure listing every violation found.
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise validation_failure(violations_from_errors(exc.errors())) from exc


def require_query_param(name: str, value: str | None) -> str:
    """Return ``value`` or raise a validation failure if it is missing/blank."""
    if value is None or not value.strip():
        raise validation_failure(
            [Violation(f"{name} is required", name, "required")],
            message=f"{name.capitalize()} query parameter is required.",
        )
    return value


def reject_fields(payload: Any, fields: Iterable[str], failure: AppException) -> None:
    """Raise ``failure`` when a mapping payload contains any of ``fields``."""
    if isinstance(payload, Mapping) and any(field in payload for field in fields):
        raise failure


def validate_value(annotation: Any, value: Any, path: str) -> Any:
    """Validate a single value, such as a query parameter, against ``annotation``.

    Returns the value as ``annotation`` normalises it, so lookups compare the
    same form the request schemas store.
    """
    try:
        return TypeAdapter(annotation).validate_python(value)
    except ValidationError as exc:
        violations = [
            Violation(
                message=str(error.get("msg", "Invalid value")),
                path=path,
                type=error_category(str(error.get("type", "invalid"))),
            )
            for error in exc.errors()
        ]
        raise validation_failure(violations) from exc
