from pathlib import Path

import pytest

from viewbundle.core.errors import TemplateCompileError
from viewbundle.core.models import ViewDefinition
from viewbundle.rendering.registry import ViewRegistry
from viewbundle.rendering.template import Template


def test_register_returns_entry_without_template():
    registry = ViewRegistry()
    entry = registry.register("a", "X", {"k": "v"})
    assert entry.template is None
    assert registry.get("a") is entry
    assert "a" in registry
    assert len(registry) == 1


def test_last_registration_wins_and_moves_to_end():
    registry = ViewRegistry()
    registry.register("header", "first")
    registry.register("body", "b")
    registry.register("header", "second")

    assert registry.names() == ["body", "header"]
    assert registry.get("header").source == "second"


def test_ensure_template_is_memoized(monkeypatch):
    calls = []
    original = Template.parse

    def counting_parse(source, name=None):
        calls.append(name)
        return original(source, name)

    monkeypatch.setattr(Template, "parse", staticmethod(counting_parse))

    entry = ViewRegistry().register("a", "Hello {{ who }}")
    first = entry.ensure_template()
    second = entry.ensure_template()

    assert first is second
    assert calls == ["a"]
    assert first.render(who="world") == "Hello world"


def test_entry_without_source_cannot_compile():
    entry = ViewRegistry().register("a")
    with pytest.raises(TemplateCompileError):
        entry.ensure_template()


def test_from_views_applies_last_writer_wins():
    views = [
        ViewDefinition(name="header", source="1", filename=Path("a.html")),
        ViewDefinition(name="footer", source="f", filename=Path("a.html")),
        ViewDefinition(name="header", source="2", options={"x": "y"}, filename=Path("b.html")),
    ]
    registry = ViewRegistry.from_views(views)

    assert registry.names() == ["footer", "header"]
    assert registry.get("header").options == {"x": "y"}
