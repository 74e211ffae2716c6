"""CLI argument parsers and validators."""

from __future__ import annotations

import typer


def parse_compiler(value: str) -> tuple[str, str]:
    """Parse a compiler argument in format EXT=MODULE:FUNCTION."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be EXT=MODULE:FUNCTION, got: {value!r}")
    ext, ref = value.split("=", 1)
    ext, ref = ext.strip(), ref.strip()
    if not ext:
        raise typer.BadParameter(f"Missing extension in: {value!r}")
    if ":" not in ref:
        raise typer.BadParameter(f"Compiler must be MODULE:FUNCTION, got: {ref!r}")
    return ext, ref


def parse_compilers(values: list[str]) -> dict[str, str]:
    return dict(map(parse_compiler, values))
