import pytest
from jinja2 import UndefinedError

from viewbundle.core.errors import TemplateCompileError
from viewbundle.rendering.template import Template


def test_parse_and_render():
    template = Template.parse("<p>{{ name }}</p>", "greeting")
    assert template.render(name="Ada") == "<p>Ada</p>"


def test_render_escapes_html():
    assert Template.parse("{{ value }}").render(value="<b>") == "&lt;b&gt;"


def test_undefined_variables_are_errors():
    with pytest.raises(UndefinedError):
        Template.parse("{{ missing }}").render()


def test_syntax_error_is_wrapped():
    with pytest.raises(TemplateCompileError, match="broken"):
        Template.parse("{% if %}", "broken")


def test_serialize_rebuilds_equivalent_template():
    template = Template.parse("{% for i in items %}{{ i }},{% endfor %}", "list")
    rebuilt = eval(template.serialize(), {"Template": Template})

    assert isinstance(rebuilt, Template)
    assert rebuilt.name == "list"
    assert rebuilt.render(items=[1, 2]) == "1,2,"
