"""Exception hierarchy for resource resolution and access.

Resolution swallows these internally; explicit open and read calls let
them propagate to the caller.
"""

from __future__ import annotations

from typing import Any


class ResourceError(Exception):
    """Base exception for all resource errors.

    Attributes:
        message: Human-readable error message.
        context: Structured context for logging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ResourceFetchError(ResourceError):
    """Raised when reading a URL fails: network error or non-success status."""

    def __init__(
        self,
        url: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        context: dict[str, Any] = {"url": url}
        if status_code is not None:
            context["status_code"] = status_code
        if reason:
            context["reason"] = reason
        super().__init__("Failed to fetch resource", context)
        self.url = url
        self.status_code = status_code


class ResourceTimeoutError(ResourceFetchError):
    """Raised when a read exceeds the configured timeout."""


class InvalidResourceError(ResourceError):
    """Raised for resource names that cannot be opened at all.

    Examples:
        - Malformed URL syntax
        - A scheme the HTTP client does not speak
    """

    def __init__(self, name: str, reason: str) -> None:
        super().__init__("Invalid resource", {"name": name, "reason": reason})
        self.name = name
