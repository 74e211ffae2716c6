"""Parse view files into named views and import directives.

A view file is a sequence of view tags. A view tag is any tag whose name ends
in ``:``; everything after it up to the next view tag (or its closing tag) is
the view's template source::

    <import: src="./shared" ns="ui">
    <Title:>
      Home
    <Body: element="main">
      {{ ui_header }}

The ``import:`` tag loads another file, placing its views under a namespace.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Union

from ..core.errors import MalformedTagError
from ..core.models import ImportDirective, ParsedViews, ViewDefinition
from ..resolution.resolver import resolve
from .scanner import scan

logger = logging.getLogger(__name__)

IMPORT_TAG = "import"

RAW_TAGS = re.compile(r"^(?:[^\s=/!>]+:|style|script)$", re.I)
VIEW_TAG_BOUNDARY = re.compile(r"</?[^\s=/!>]+:[\s>]", re.I)


def match_end(tag_name: str) -> re.Pattern[str]:
    """Return the pattern ending the raw body of ``tag_name``.

    View bodies end at any following view tag, opening or closing.
    """
    if tag_name.endswith(":"):
        return VIEW_TAG_BOUNDARY
    return re.compile(rf"</{re.escape(tag_name)}", re.I)


def namespace_prefix(namespace: str | None) -> str:
    return f"{namespace}:" if namespace else ""


def import_namespace(
    namespace: str | None, attrs: dict[str, str], resolved: Path
) -> str | None:
    """Namespace the views of an imported file are registered under.

    ``ns`` wins when given. Otherwise the base name of ``src`` is used, with the
    resolved file's extension removed. An empty namespace keeps the importer's.
    """
    if "ns" in attrs:
        name = attrs["ns"]
    else:
        name = os.path.basename(attrs["src"].rstrip("/\\"))
        if resolved.suffix and name.endswith(resolved.suffix):
            name = name[: -len(resolved.suffix)]
    if not name:
        return namespace
    return namespace_prefix(namespace) + name


@dataclass(frozen=True)
class AwaitingTag:
    """Between view bodies; plain text is ignored, stray view tags are not."""


@dataclass(frozen=True)
class InViewBody:
    """A view tag was opened and its body is the next raw text."""

    name: str
    attrs: dict[str, str] = field(default_factory=dict)


ParserState = Union[AwaitingTag, InViewBody]


class ViewFileParser:
    """Collects imports and views from scanner events of one file."""

    def __init__(
        self,
        namespace: str | None,
        filename: Path,
        extensions: Sequence[str],
        module_dirs: Sequence[str] = ("node_modules",),
    ) -> None:
        self.namespace = namespace
        self.prefix = namespace_prefix(namespace)
        self.filename = filename
        self.extensions = extensions
        self.module_dirs = module_dirs
        self.state: ParserState = AwaitingTag()
        self.imports: list[ImportDirective] = []
        self.views: list[ViewDefinition] = []

    def on_start(self, tag: str, tag_name: str, attrs: dict[str, str]) -> None:
        if not tag_name.endswith(":"):
            raise MalformedTagError(
                f"Expected tag ending in colon (:) instead of {tag}",
                context={"tag": tag, "filename": self.filename},
            )
        self.state = InViewBody(name=tag_name[:-1], attrs=attrs)

    def on_end(self, tag: str, tag_name: str) -> None:
        if not tag_name.endswith(":"):
            raise MalformedTagError(
                f"Expected tag ending in colon (:) instead of {tag}",
                context={"tag": tag, "filename": self.filename},
            )
        self.state = AwaitingTag()

    def on_text(self, text: str, is_raw: bool) -> None:
        state = self.state
        if not isinstance(state, InViewBody):
            # A view tag the scanner could not parse surfaces here as text
            if VIEW_TAG_BOUNDARY.match(text):
                raise MalformedTagError(
                    f"Malformed view tag: {text.splitlines()[0]}",
                    context={"filename": self.filename},
                )
            return
        self.state = AwaitingTag()

        if state.name == IMPORT_TAG:
            self._add_import(state.attrs)
        else:
            self.views.append(
                ViewDefinition(
                    name=self.prefix + state.name,
                    source=text,
                    options=state.attrs or None,
                    filename=self.filename,
                )
            )

    def _add_import(self, attrs: dict[str, str]) -> None:
        src = attrs.get("src")
        if not src:
            raise MalformedTagError(
                "Import tag requires a src attribute",
                context={"filename": self.filename},
            )
        resolved = resolve(
            src,
            self.filename.parent,
            self.extensions,
            module_dirs=self.module_dirs,
        )
        directive = ImportDirective(
            filename=resolved,
            namespace=import_namespace(self.namespace, attrs, resolved),
        )
        logger.debug(f"{self.filename}: import {resolved} as {directive.namespace!r}")
        self.imports.append(directive)

    def result(self) -> ParsedViews:
        return ParsedViews(imports=self.imports, views=self.views)


def parse_views(
    namespace: str | None,
    text: str,
    filename: Path,
    extensions: Sequence[str],
    *,
    module_dirs: Sequence[str] = ("node_modules",),
) -> ParsedViews:
    """Parse view markup into imports and namespaced views.

    Args:
        namespace: Namespace of the file, ``None`` for entry files
        text: View markup
        filename: File the markup came from; imports resolve from its directory
        extensions: Extensions tried when resolving imports
        module_dirs: Directory names searched for package imports

    Returns:
        Imports and views, each in the order they appear
    """
    parser = ViewFileParser(namespace, filename, extensions, module_dirs)
    scan(
        text + "\n",
        raw_tags=RAW_TAGS,
        match_end=match_end,
        on_start=parser.on_start,
        on_text=parser.on_text,
        on_end=parser.on_end,
    )
    return parser.result()
