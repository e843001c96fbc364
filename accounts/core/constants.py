"""
App-wide constants for route configuration.

Single source of truth for route prefixes, tags, and common response
definitions used in the OpenAPI schema.
"""

from dataclasses import dataclass
from typing import Any

from accounts.models.error import ErrorResponse


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints (relative to the API prefix)."""

    USER = RouteConfig(prefix="/users", tag="users")
    HEALTH = RouteConfig(prefix="/health", tag="health")


class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    BAD_REQUEST: dict[int | str, dict[str, Any]] = {
        400: {
            "model": ErrorResponse,
            "description": "Invalid request data or conflicting resource",
        }
    }
    NOT_FOUND: dict[int | str, dict[str, Any]] = {
        404: {"model": ErrorResponse, "description": "Resource not found"}
    }
    INTERNAL_ERROR: dict[int | str, dict[str, Any]] = {
        500: {"model": ErrorResponse, "description": "Unexpected server error"}
    }
