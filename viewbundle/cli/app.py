"""Main CLI application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import typer
from typing_extensions import Annotated

from ..core.errors import ViewBundleError
from ..core.settings import CompileOptions, load_options_file
from ..rendering import engine
from ..rendering.io import write_artifact
from .parsers import parse_compilers

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="viewbundle",
    help="Compile view template files into a precompiled Python registry module.",
)

EntriesArg = Annotated[
    list[str], typer.Argument(help="Entry view files, loaded in order.", metavar="ENTRY")
]
CompilerOpt = Annotated[
    list[str],
    typer.Option(
        "--compiler",
        help="Compile files with extension EXT using MODULE:FUNCTION. Repeatable.",
        metavar="EXT=MODULE:FUNCTION",
    ),
]
ConfigOpt = Annotated[
    str,
    typer.Option("--config", help="YAML file with compile options.", metavar="FILE"),
]
BaseDirOpt = Annotated[
    str,
    typer.Option(
        "--base-dir",
        help="Directory entry files are resolved from (default: cwd).",
        metavar="DIR",
    ),
]
VerboseOpt = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _entry_refs(entries: list[str], options: CompileOptions) -> list[str]:
    """Make entries naming files on disk absolute so they are not package refs."""
    root = options.base_dir or Path.cwd()
    refs = []
    for entry in entries:
        candidate = root / entry
        refs.append(str(candidate.absolute()) if candidate.exists() else entry)
    return refs


def _build_options(
    config_file: str, compilers: list[str], base_dir: str, **values: Any
) -> CompileOptions:
    overrides = {k: v for k, v in values.items() if v is not None}
    if compilers:
        overrides["compilers"] = parse_compilers(compilers)
    if base_dir:
        overrides["base_dir"] = Path(base_dir)

    if config_file:
        options = load_options_file(Path(config_file))
        if "compilers" in overrides:
            overrides["compilers"] = {**options.compilers, **overrides["compilers"]}
        return options.model_copy(update=overrides)
    return CompileOptions(**overrides)


@app.command("compile")
def compile_command(
    entries: EntriesArg,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Write the compiled module to FILE (default: stdout).",
            metavar="FILE",
        ),
    ] = "",
    module_name: Annotated[
        str,
        typer.Option(
            "--module-name", help="Name the module is exposed as.", metavar="NAME"
        ),
    ] = "",
    minify: Annotated[
        bool,
        typer.Option("--minify", help="Drop view sources and compact the module."),
    ] = False,
    compilers: CompilerOpt = [],
    config_file: ConfigOpt = "",
    base_dir: BaseDirOpt = "",
    deps: Annotated[
        bool,
        typer.Option("--deps", help="Print every loaded file to stderr."),
    ] = False,
    verbose: VerboseOpt = False,
) -> None:
    """Compile view files into a registry module."""
    _configure_logging(verbose)
    logger.debug("Starting viewbundle compile")

    try:
        options = _build_options(
            config_file,
            compilers,
            base_dir,
            module_name=module_name or None,
            minify=minify or None,
        )
        result = engine.compile_views(_entry_refs(entries, options), options)
    except ViewBundleError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    if output:
        output_path = Path(output)
        write_artifact(output_path, result.artifact)
        logger.info(f"Wrote {output_path}")
    else:
        sys.stdout.write(result.artifact)

    if deps:
        for path in result.files:
            typer.echo(str(path), err=True)


@app.command("list")
def list_command(
    entries: EntriesArg,
    compilers: CompilerOpt = [],
    config_file: ConfigOpt = "",
    base_dir: BaseDirOpt = "",
    verbose: VerboseOpt = False,
) -> None:
    """List registered view names, in registry order."""
    _configure_logging(verbose)

    try:
        options = _build_options(config_file, compilers, base_dir)
        registry, _ = engine.build_registry(_entry_refs(entries, options), options)
    except ViewBundleError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    for entry in registry:
        typer.echo(entry.name)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
