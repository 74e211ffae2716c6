"""Domain models for view loading and compilation."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

Compiler = Callable[[str, Path], str]


class ViewDefinition(BaseModel):
    """A named view parsed out of a view file."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Colon-delimited view name")
    source: str = Field(..., description="Raw template source of the view body")
    options: dict[str, str] | None = Field(
        default=None, description="Attributes of the view tag"
    )
    filename: Path = Field(..., description="File the view was declared in")


class ImportDirective(BaseModel):
    """A resolved import tag waiting to be loaded."""

    model_config = ConfigDict(frozen=True)

    filename: Path = Field(..., description="Resolved file to import")
    namespace: str | None = Field(
        default=None, description="Namespace applied to the imported views"
    )


class ParsedViews(BaseModel):
    """Imports and views found in a single file, each in encounter order."""

    imports: list[ImportDirective] = Field(default_factory=list)
    views: list[ViewDefinition] = Field(default_factory=list)


class LoadResult(BaseModel):
    """Views and visited files collected by one load."""

    views: list[ViewDefinition] = Field(default_factory=list)
    files: list[Path] = Field(default_factory=list)

    @classmethod
    def concat(cls, results: Iterable[LoadResult]) -> LoadResult:
        views: list[ViewDefinition] = []
        files: list[Path] = []
        for result in results:
            views.extend(result.views)
            files.extend(result.files)
        return cls(views=views, files=files)


class AppConfig(BaseModel):
    """Per-run configuration: recognized extensions and their compilers."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    extensions: list[str] = Field(..., min_length=1, description="Ordered view extensions")
    compilers: dict[str, Compiler] = Field(..., description="Extension to compiler map")
    module_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules"],
        description="Directory names searched for package references",
    )


class CompileResult(BaseModel):
    """Output of a full compilation run."""

    artifact: str = Field(..., description="Bundled module text")
    source: str = Field(..., description="Serialized registry before bundling")
    files: list[Path] = Field(default_factory=list, description="Every file loaded")
    views: list[str] = Field(default_factory=list, description="Registered view names")
