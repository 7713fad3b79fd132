"""Shared error taxonomy for the Alfred workflow toolkit."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class AWError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(AWError):
    """Failure due to invalid workflow configuration."""


class MenuValidationError(AWError):
    """A single menu item or input definition failed its shape constraints."""

    @property
    def errors(self) -> list[dict[str, Any]]:
        return list(self.context.get("errors", []))

    @property
    def paths(self) -> list[str]:
        return [entry["loc"] for entry in self.errors]


class CollectionValidationError(AWError):
    """The assembled collection violates a global invariant."""

    @property
    def path(self) -> list[str]:
        return list(self.context.get("path", []))


class IconNotFoundError(AWError):
    """An icon file is missing and the strict icon policy is active."""


class ProducerError(AWError):
    """An upstream producer failed while building its menu items."""


class GitHubError(AWError):
    """Failure talking to the GitHub REST API."""


def format_locations(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into ``{loc, msg, type}`` with dotted paths."""
    flattened: list[dict[str, Any]] = []
    for entry in errors:
        loc = ".".join(str(part) for part in entry.get("loc", ()))
        flattened.append(
            {"loc": loc, "msg": entry.get("msg", ""), "type": entry.get("type", "")}
        )
    return flattened


def error_to_payload(error: AWError) -> dict[str, Any]:
    """Convert an AWError to a log/debug payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
