"""View compilation engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from ..core.config import build_app_config
from ..core.models import CompileResult
from ..core.settings import CompileOptions
from ..parsing.loader import load_all
from .bundler import bundle
from .registry import ViewRegistry
from .serializer import serialize_registry

logger = logging.getLogger(__name__)


def build_registry(
    filenames: str | Path | Iterable[str | Path], options: CompileOptions
) -> tuple[ViewRegistry, list[Path]]:
    """Load all entry files and register their views.

    Args:
        filenames: Entry view files, loaded in order
        options: Compile options

    Returns:
        The registry and every file that was loaded
    """
    config = build_app_config(options.compilers, options.module_dirs)
    loaded = load_all(config, filenames, base_dir=options.base_dir)
    registry = ViewRegistry.from_views(loaded.views)
    logger.debug(f"Registered {len(registry)} view(s)")
    return registry, loaded.files


def compile_views(
    filenames: str | Path | Iterable[str | Path],
    options: CompileOptions | None = None,
    **overrides: Any,
) -> CompileResult:
    """Compile view files into a bundled registry module.

    Args:
        filenames: Entry view files, loaded in order
        options: Compile options; defaults come from the environment
        **overrides: Option values taking precedence over ``options``

    Returns:
        The bundled module, its unbundled source, loaded files and view names
    """
    if options is None:
        options = CompileOptions(**overrides)
    elif overrides:
        options = options.model_copy(update=overrides)

    logger.info(f"Compiling views into module {options.module_name!r}")

    registry, files = build_registry(filenames, options)
    source = serialize_registry(registry, options.minify)
    artifact = bundle(source, exposed_name=options.module_name, minify=options.minify)

    logger.info(f"Compiled {len(registry)} view(s) from {len(files)} file(s)")
    return CompileResult(
        artifact=artifact, source=source, files=files, views=registry.names()
    )
