"""Ordered registry of views and their lazily compiled templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..core.errors import TemplateCompileError
from ..core.models import ViewDefinition
from .template import Template


@dataclass
class ViewEntry:
    name: str
    source: str | None = None
    options: dict[str, str] | None = None
    template: Template | None = None

    def ensure_template(self) -> Template:
        """Compile the entry's source on first use and cache the template."""
        if self.template is None:
            if self.source is None:
                raise TemplateCompileError(
                    f"View {self.name!r} has neither source nor template",
                    context={"view": self.name},
                )
            self.template = Template.parse(self.source, self.name)
        return self.template


class ViewRegistry:
    """Views keyed by name, ordered by when each name was last registered."""

    def __init__(self) -> None:
        self._entries: dict[str, ViewEntry] = {}

    @classmethod
    def from_views(cls, views: Iterable[ViewDefinition]) -> ViewRegistry:
        registry = cls()
        for view in views:
            registry.register(view.name, view.source, view.options)
        return registry

    def register(
        self,
        name: str,
        source: str | None = None,
        options: dict[str, str] | None = None,
    ) -> ViewEntry:
        """Add a view, replacing and moving to the end any view of the same name."""
        self._entries.pop(name, None)
        entry = ViewEntry(name=name, source=source, options=options)
        self._entries[name] = entry
        return entry

    def get(self, name: str) -> ViewEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ViewEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ViewRegistry({self.names()!r})"
