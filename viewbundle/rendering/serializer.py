"""Write a view registry out as a Python module."""

from __future__ import annotations

import logging

from .registry import ViewRegistry

logger = logging.getLogger(__name__)

TEMPLATE_MODULE = "viewbundle.rendering.template"

_HEADER = f'''"""Precompiled view registry."""
from {TEMPLATE_MODULE} import Template


def load(views):
'''


def serialize_registry(registry: ViewRegistry, minify: bool = False) -> str:
    """Serialize ``registry`` into module source defining ``load(views)``.

    Calling ``load`` with an empty registry registers every view again, in the
    same order, with its compiled template attached. Templates not compiled yet
    are compiled here.

    Args:
        registry: Views to serialize
        minify: Leave out view sources; the compiled templates do not need them

    Returns:
        Python module source
    """
    lines = [_HEADER]
    for entry in registry:
        template = entry.ensure_template()
        source = None if minify else entry.source
        options = entry.options or None
        lines.append(
            f"    views.register({entry.name!r}, {source!r}, {options!r})"
            f".template = {template.serialize()}\n"
        )
    lines.append("    return views\n")

    logger.debug(f"Serialized {len(registry)} view(s) (minify={minify})")
    return "".join(lines)
