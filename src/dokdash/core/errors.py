# dokdash/core/errors.py
"""
Error taxonomy for the aggregation pipeline.

``str(exc)`` is always the message shown to the user; the HTTP layer turns
every ``DashboardError`` into ``500 {"error": str(exc)}``.
"""
from __future__ import annotations

from typing import Any


class DashboardError(Exception):
    pass


class ConfigurationError(DashboardError):
    pass


class UpstreamHttpError(DashboardError):
    """An upstream call answered with a non-success status."""

    def __init__(self, target: str, status_code: int, reason: str = ""):
        self.target = target
        self.status_code = status_code
        self.reason = reason
        status = f"{status_code} {reason}".strip()
        super().__init__(f"Unable to load {target} ({status})")


class NetworkError(DashboardError):
    """The upstream could not be reached at all."""

    def __init__(self, target: str, cause: Exception | str):
        self.target = target
        self.cause = cause
        detail = str(cause) or type(cause).__name__
        super().__init__(f"Unable to reach {target}: {detail}")


class PayloadValidationError(DashboardError):
    """A response body did not match the expected shape."""

    def __init__(self, target: str, errors: list[dict[str, Any]] | None = None, detail: str = ""):
        self.target = target
        self.errors = errors or []
        if not detail:
            detail = "; ".join(_format_error(err) for err in self.errors)
        super().__init__(f"Invalid {target} payload: {detail}")


class StorageCorruptionError(DashboardError):
    """Persisted pin data could not be decoded."""


def _format_error(err: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
    msg = err.get("msg", "invalid value")
    if "input" in err:
        return f"{loc}: {msg} (got {type(err['input']).__name__})"
    return f"{loc}: {msg}"
