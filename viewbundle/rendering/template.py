"""Jinja2-backed templates that can be written out as Python code.

Compiled bundles import this module at load time to rebuild their templates.
"""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError
from jinja2 import Template as JinjaTemplate

from ..core.errors import TemplateCompileError

environment = Environment(
    undefined=StrictUndefined,
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


class Template:
    """A compiled view template together with its generated code."""

    def __init__(self, code: str, name: str | None = None) -> None:
        self.code = code
        self.name = name
        filename = f"<view {name}>" if name else "<view>"
        self._template: JinjaTemplate = environment.template_class.from_code(
            environment,
            compile(code, filename, "exec"),
            environment.make_globals(None),
        )

    @classmethod
    def parse(cls, source: str, name: str | None = None) -> Template:
        """Compile template source.

        Args:
            source: Jinja2 template text
            name: View name, used in error messages

        Returns:
            Compiled template
        """
        try:
            code = environment.compile(source, name=name, raw=True)
        except TemplateSyntaxError as exc:
            raise TemplateCompileError(
                f"Invalid template for view {name!r}: {exc}",
                context={"view": name, "line": exc.lineno},
            ) from exc
        return cls(code, name)

    @classmethod
    def from_code(cls, code: str, name: str | None = None) -> Template:
        return cls(code, name)

    def serialize(self) -> str:
        """Return a Python expression that rebuilds this template."""
        return f"Template.from_code({self.code!r}, {self.name!r})"

    def render(self, **context: Any) -> str:
        return self._template.render(**context)

    def __repr__(self) -> str:
        return f"Template(name={self.name!r})"
