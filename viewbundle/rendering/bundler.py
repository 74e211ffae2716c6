"""Package serialized views as a standalone, importable module."""

from __future__ import annotations

import ast
import logging

from ..core.errors import BundleError

logger = logging.getLogger(__name__)

MODULE_NAME_ATTR = "MODULE_NAME"


def _strip_docstring(tree: ast.Module) -> None:
    body = tree.body
    if (
        body
        and isinstance(body[0], ast.Expr)
        and isinstance(body[0].value, ast.Constant)
        and isinstance(body[0].value.value, str)
    ):
        del body[0]


def bundle(source_text: str, *, exposed_name: str = "views", minify: bool = False) -> str:
    """Wrap serialized views into the module exposed as ``exposed_name``.

    The template module the views import is left as an import and resolved
    when the bundle is loaded.

    Args:
        source_text: Output of the serializer
        exposed_name: Name the module is exposed under
        minify: Re-emit the module without comments and docstring

    Returns:
        Module source
    """
    try:
        tree = ast.parse(source_text)
    except SyntaxError as exc:
        raise BundleError(
            f"Serialized views are not valid Python: {exc}",
            context={"module": exposed_name, "line": exc.lineno},
        ) from exc

    footer = f"\n{MODULE_NAME_ATTR} = {exposed_name!r}\n"

    if minify:
        _strip_docstring(tree)
        artifact = ast.unparse(tree) + footer
    else:
        artifact = f"# Generated by viewbundle; exposed as {exposed_name!r}.\n{source_text}{footer}"

    logger.debug(f"Bundled module {exposed_name!r} ({len(artifact)} chars)")
    return artifact
