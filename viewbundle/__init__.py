"""Viewbundle - compile view template files into a precompiled registry module."""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.errors import (
    CircularImportError,
    ConfigurationError,
    MalformedTagError,
    ResolutionError,
    ViewBundleError,
    ViewFileNotFoundError,
)
from .core.settings import CompileOptions
from .rendering.engine import compile_views
from .rendering.registry import ViewRegistry

__all__ = [
    "CircularImportError",
    "CompileOptions",
    "ConfigurationError",
    "MalformedTagError",
    "ResolutionError",
    "ViewBundleError",
    "ViewFileNotFoundError",
    "ViewRegistry",
    "compile_views",
]
