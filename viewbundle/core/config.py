"""Build the per-run application config from compile options."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from ..resolution.compilers import (
    DEFAULT_EXTENSION,
    html_compiler,
    load_compiler,
    normalize_extension,
)
from .models import AppConfig

logger = logging.getLogger(__name__)


def build_app_config(
    compilers: Mapping[str, Any] | None = None,
    module_dirs: Iterable[str] | None = None,
) -> AppConfig:
    """Combine the default ``.html`` compiler with caller supplied compilers.

    Args:
        compilers: Extension to compiler (callable or ``module:function``)
        module_dirs: Directory names searched for package references

    Returns:
        Config whose extension list starts with the default extension
    """
    extensions = [DEFAULT_EXTENSION]
    registry = {DEFAULT_EXTENSION: html_compiler}

    for raw_ext, ref in (compilers or {}).items():
        ext = normalize_extension(raw_ext)
        if ext not in extensions:
            extensions.append(ext)
        registry[ext] = load_compiler(ref)

    logger.debug(f"View extensions: {extensions}")

    kwargs: dict[str, Any] = {}
    if module_dirs is not None:
        kwargs["module_dirs"] = list(module_dirs)
    return AppConfig(extensions=extensions, compilers=registry, **kwargs)
