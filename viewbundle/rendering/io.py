"""Writing compiled bundles to disk."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def write_artifact(path: Path, artifact: str) -> None:
    """Replace ``path`` with ``artifact`` in one step.

    The bundle is staged next to its destination; a partial module never
    appears under the final name.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.stem}-",
        suffix=".tmp",
        delete=False,
    ) as staged:
        staged.write(artifact)

    staged_path = Path(staged.name)
    try:
        staged_path.chmod(0o644)
        staged_path.replace(path)
    except OSError:
        staged_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Staged bundle moved to {path}")
