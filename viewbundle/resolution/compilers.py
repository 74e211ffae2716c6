"""Per-extension compilers that turn view files into tag markup."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any

from ..core.errors import ConfigurationError
from ..core.models import AppConfig, Compiler

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".html"


def html_compiler(text: str, filename: Path) -> str:
    """Identity compiler for files already written as view markup."""
    return text


def normalize_extension(extension: str) -> str:
    extension = extension.strip()
    if not extension:
        raise ConfigurationError("Compiler extension must not be empty")
    return extension if extension.startswith(".") else f".{extension}"


def load_compiler(ref: Any) -> Compiler:
    """Return a compiler callable from a callable or a ``module:function`` string.

    Args:
        ref: Callable, or dotted reference such as ``"mypkg.pug:compile"``

    Returns:
        Compiler callable taking ``(text, filename)``
    """
    if callable(ref):
        return ref
    if not isinstance(ref, str) or ":" not in ref:
        raise ConfigurationError(
            f"Compiler must be a callable or 'module:function', got: {ref!r}"
        )

    module_name, _, attr_path = ref.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(
            f"Unable to import compiler module {module_name!r}: {exc}",
            context={"compiler": ref},
        ) from exc

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise ConfigurationError(
                f"Compiler {ref!r} not found", context={"compiler": ref}
            ) from exc

    if not callable(target):
        raise ConfigurationError(
            f"Compiler {ref!r} is not callable", context={"compiler": ref}
        )
    logger.debug(f"Loaded compiler {ref}")
    return target


def compile_markup(config: AppConfig, extension: str, text: str, filename: Path) -> str:
    """Run the compiler registered for ``extension`` over ``text``."""
    compiler = config.compilers.get(extension)
    if compiler is None:
        raise ConfigurationError(
            f"Unable to find compiler for: {extension}",
            context={"extension": extension, "filename": filename},
        )
    return compiler(text, filename)
