"""Recursively load view files and their imports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..core.errors import CircularImportError, ResolutionError, ViewFileNotFoundError
from ..core.models import AppConfig, LoadResult
from ..resolution.compilers import compile_markup
from ..resolution.resolver import resolve
from .views import parse_views

logger = logging.getLogger(__name__)


def load_views(
    config: AppConfig,
    source_file: str | Path,
    namespace: str | None = None,
    *,
    base_dir: Path | None = None,
    _stack: tuple[Path, ...] = (),
) -> LoadResult:
    """Load a view file and, depth first, every file it imports.

    Args:
        config: Extensions and compilers for this run
        source_file: Reference to the file to load
        namespace: Namespace applied to the file's views
        base_dir: Directory ``source_file`` is resolved from (default: cwd)

    Returns:
        Imported views followed by the file's own views, and every file loaded
        with this file last
    """
    ref = str(source_file)
    try:
        resolved = resolve(
            ref, base_dir, config.extensions, module_dirs=config.module_dirs
        )
    except ResolutionError as exc:
        raise ViewFileNotFoundError(
            f"View template file not found: {ref}",
            context={"ref": ref, **exc.context},
        ) from exc

    if resolved in _stack:
        chain = " -> ".join(str(p) for p in (*_stack, resolved))
        raise CircularImportError(
            f"Circular view import: {chain}", context={"filename": resolved}
        )

    logger.debug(f"Loading views from {resolved} (namespace={namespace!r})")

    text = resolved.read_text(encoding="utf-8", errors="replace")
    markup = compile_markup(config, resolved.suffix, text, resolved)
    parsed = parse_views(
        namespace, markup, resolved, config.extensions, module_dirs=config.module_dirs
    )

    stack = (*_stack, resolved)
    imported = [
        load_views(config, item.filename, item.namespace, _stack=stack)
        for item in parsed.imports
    ]

    own = LoadResult(views=parsed.views, files=[resolved])
    return LoadResult.concat([*imported, own])


def load_all(
    config: AppConfig,
    filenames: str | Path | Iterable[str | Path],
    *,
    base_dir: Path | None = None,
) -> LoadResult:
    """Load every entry file in order and concatenate the results."""
    if isinstance(filenames, (str, Path)):
        filenames = [filenames]

    results = [
        load_views(config, filename, base_dir=base_dir) for filename in filenames
    ]
    result = LoadResult.concat(results)
    logger.info(f"Loaded {len(result.views)} view(s) from {len(result.files)} file(s)")
    return result
