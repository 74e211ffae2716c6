"""Resolve view references to concrete files.

References follow the usual module-resolution rules: paths starting with
``./``, ``../`` or ``/`` are looked up relative to the base directory, anything
else is searched for in ``node_modules``-style directories of the base
directory and each of its ancestors. A reference may omit its extension and
may name a directory, in which case ``index`` is used.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Sequence

from ..core.errors import ResolutionError

logger = logging.getLogger(__name__)

PackageFilter = Callable[[dict[str, Any]], "dict[str, Any] | None"]

_PATH_REF = re.compile(r"^(?:\.\.?(?:[/\\]|$)|/|\\|[A-Za-z]:[/\\])")


def strip_main(package: dict[str, Any]) -> dict[str, Any]:
    """Drop the code entry point so a template package resolves by file name."""
    package.pop("main", None)
    return package


def _load_as_file(candidate: Path, extensions: Sequence[str]) -> Path | None:
    if candidate.is_file():
        return candidate
    for ext in extensions:
        with_ext = Path(f"{candidate}{ext}")
        if with_ext.is_file():
            return with_ext
    return None


def _read_package(directory: Path) -> dict[str, Any]:
    package_file = directory / "package.json"
    if not package_file.is_file():
        return {}
    try:
        data = json.loads(package_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ResolutionError(
            f"Invalid package metadata: {package_file}",
            context={"path": package_file},
        ) from exc
    return data if isinstance(data, dict) else {}


def _load_as_directory(
    candidate: Path, extensions: Sequence[str], package_filter: PackageFilter | None
) -> Path | None:
    if not candidate.is_dir():
        return None

    package = _read_package(candidate)
    if package_filter is not None:
        filtered = package_filter(package)
        if filtered is not None:
            package = filtered

    main = package.get("main")
    if isinstance(main, str) and main:
        target = candidate / main
        found = _load_as_file(target, extensions) or _load_as_file(
            target / "index", extensions
        )
        if found is not None:
            return found

    return _load_as_file(candidate / "index", extensions)


def _load(
    candidate: Path, extensions: Sequence[str], package_filter: PackageFilter | None
) -> Path | None:
    return _load_as_file(candidate, extensions) or _load_as_directory(
        candidate, extensions, package_filter
    )


def _module_search_dirs(base_dir: Path, module_dirs: Sequence[str]) -> list[Path]:
    dirs: list[Path] = []
    for parent in (base_dir, *base_dir.parents):
        if parent.name in module_dirs:
            continue
        dirs.extend(parent / name for name in module_dirs)
    return dirs


def resolve(
    ref: str,
    base_dir: Path | None = None,
    extensions: Sequence[str] = (".html",),
    *,
    module_dirs: Sequence[str] = ("node_modules",),
    package_filter: PackageFilter | None = strip_main,
) -> Path:
    """Find the file a view reference points to.

    Args:
        ref: Relative, absolute or package reference, extension optional
        base_dir: Directory relative references start from (default: cwd)
        extensions: Extensions tried, in order, after the verbatim reference
        module_dirs: Directory names searched for package references
        package_filter: Hook applied to ``package.json`` metadata before use

    Returns:
        Absolute path of the resolved file
    """
    base = Path(os.path.abspath(base_dir if base_dir is not None else Path.cwd()))

    if _PATH_REF.match(ref):
        candidates = [Path(os.path.normpath(base / ref))]
    else:
        candidates = [
            Path(os.path.normpath(search_dir / ref))
            for search_dir in _module_search_dirs(base, module_dirs)
        ]

    for candidate in candidates:
        found = _load(candidate, extensions, package_filter)
        if found is not None:
            logger.debug(f"Resolved {ref!r} → {found}")
            return found

    raise ResolutionError(
        f"Cannot find {ref!r} from {base}",
        context={"ref": ref, "base_dir": base},
    )
