from __future__ import annotations

from typing import Any, Dict, Mapping


class TempletError(Exception):
    """Base exception for Templet."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(TempletError, ValueError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TempletError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ResourceReadError(TempletError, RuntimeError):
    """Raised when a source resource cannot be read during export."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TempletError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ResourceSetClosedError(TempletError, ValueError):
    """Raised when a closed resource set is used."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TempletError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "TempletError",
    "ConfigurationError",
    "ResourceReadError",
    "ResourceSetClosedError",
]
