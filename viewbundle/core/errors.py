"""Error types raised while compiling view files."""

from __future__ import annotations

from typing import Any, Mapping


class ViewBundleError(Exception):
    """Base class for all view compilation failures."""

    def __init__(
        self, message: str = "", *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": {k: str(v) for k, v in self.context.items()},
        }


class ResolutionError(ViewBundleError, FileNotFoundError):
    """Raised when a view reference does not resolve to a file."""


class ViewFileNotFoundError(ResolutionError):
    """Raised when an entry or imported view file cannot be found."""


class ConfigurationError(ViewBundleError, ValueError):
    """Raised for missing compilers and invalid options."""


class MalformedTagError(ViewBundleError, ValueError):
    """Raised when a view file contains a tag that is not a view tag."""


class CircularImportError(ViewBundleError):
    """Raised when view files import each other in a cycle."""


class TemplateCompileError(ViewBundleError):
    """Raised when a view body cannot be compiled into a template."""


class BundleError(ViewBundleError):
    """Raised when serialized views do not form a valid module."""


__all__ = [
    "ViewBundleError",
    "ResolutionError",
    "ViewFileNotFoundError",
    "ConfigurationError",
    "MalformedTagError",
    "CircularImportError",
    "TemplateCompileError",
    "BundleError",
]
