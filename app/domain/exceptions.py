"""Centralized exception hierarchy for Flowl.

All domain and service exceptions inherit from :class:`FlowlError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    FlowlError (base: maps to 500)
    ├── ValidationError             (400: bad input from caller)
    ├── NotFoundError               (404: entity does not exist)
    ├── ConflictError               (409: duplicate / state conflict)
    ├── ServiceError                (500: business-logic failure)
    │   └── RepositoryError         (500: database / persistence)
    ├── ServiceUnavailableError     (503: broker not reachable)
    └── ConfigurationError          (500: missing / invalid config)
"""

from __future__ import annotations


class FlowlError(Exception):
    """Base exception for all Flowl application errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the class sets ``expose_message``).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500
    expose_message: bool = False

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(FlowlError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400
    expose_message: bool = True


class NotFoundError(FlowlError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404
    expose_message: bool = True


class ConflictError(FlowlError):
    """Operation conflicts with existing state (HTTP 409)."""

    http_status: int = 409
    expose_message: bool = True


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(FlowlError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class RepositoryError(ServiceError):
    """Database / persistence layer failure (HTTP 500)."""

    http_status: int = 500


class ServiceUnavailableError(FlowlError):
    """A broker-dependent action was requested while the broker is unavailable (HTTP 503)."""

    http_status: int = 503
    expose_message: bool = True


class ConfigurationError(FlowlError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
