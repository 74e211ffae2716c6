import ast

from viewbundle.rendering.registry import ViewRegistry
from viewbundle.rendering.serializer import TEMPLATE_MODULE, serialize_registry


def _registry():
    registry = ViewRegistry()
    registry.register("a", "<h1>{{ title }}</h1>", {"element": "header"})
    registry.register("b", "Y {{ 1 + 1 }}")
    return registry


def _evaluate(source):
    namespace = {}
    exec(compile(source, "<views>", "exec"), namespace)
    return namespace["load"]


def test_output_is_a_module_importing_only_templates():
    source = serialize_registry(_registry())
    tree = ast.parse(source)

    imports = [node for node in tree.body if isinstance(node, (ast.Import, ast.ImportFrom))]
    assert [node.module for node in imports] == [TEMPLATE_MODULE]
    assert [node.name for node in tree.body if isinstance(node, ast.FunctionDef)] == ["load"]


def test_round_trip_preserves_order_and_templates():
    load = _evaluate(serialize_registry(_registry()))

    fresh = ViewRegistry()
    assert load(fresh) is fresh

    assert fresh.names() == ["a", "b"]
    assert all(entry.template is not None for entry in fresh)
    assert fresh.get("a").options == {"element": "header"}
    assert fresh.get("b").options is None
    assert fresh.get("a").template.render(title="Hi") == "<h1>Hi</h1>"
    assert fresh.get("b").template.render() == "Y 2"


def test_sources_are_kept_without_minify():
    registry = _registry()
    source = serialize_registry(registry, minify=False)

    for entry in registry:
        assert repr(entry.source) in source

    fresh = _evaluate(source)(ViewRegistry())
    assert fresh.get("a").source == "<h1>{{ title }}</h1>"


def test_minify_drops_sources():
    registry = _registry()
    source = serialize_registry(registry, minify=True)

    for entry in registry:
        assert entry.source not in source
    assert "views.register('a', None, {'element': 'header'})" in source

    fresh = _evaluate(source)(ViewRegistry())
    assert fresh.get("a").source is None
    assert fresh.get("a").template.render(title="x") == "<h1>x</h1>"


def test_serialization_compiles_missing_templates_once():
    registry = _registry()
    entry = registry.get("a")
    assert entry.template is None

    serialize_registry(registry)
    template = entry.template
    assert template is not None

    serialize_registry(registry)
    assert entry.template is template


def test_empty_registry_serializes_to_valid_module():
    load = _evaluate(serialize_registry(ViewRegistry()))
    assert len(load(ViewRegistry())) == 0
