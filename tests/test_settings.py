import pytest

from viewbundle.core.errors import ConfigurationError
from viewbundle.core.settings import CompileOptions, load_options_file


def test_defaults():
    options = CompileOptions()
    assert options.module_name == "views"
    assert options.minify is False
    assert options.compilers == {}
    assert options.base_dir is None
    assert options.module_dirs == ["node_modules"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VIEWBUNDLE_MINIFY", "true")
    monkeypatch.setenv("VIEWBUNDLE_MODULE_DIRS", '["view_modules"]')
    options = CompileOptions()
    assert options.minify is True
    assert options.module_dirs == ["view_modules"]


def test_load_options_file(write_file, tmp_path):
    path = write_file(
        "conf/viewbundle.yaml",
        "module_name: site\n"
        "minify: true\n"
        "base_dir: ../views\n"
        "compilers:\n"
        "  .txt: textwrap:dedent\n",
    )

    options = load_options_file(path)

    assert options.module_name == "site"
    assert options.minify is True
    assert options.base_dir == tmp_path / "conf" / ".." / "views"
    assert options.compilers == {".txt": "textwrap:dedent"}


def test_overrides_win_over_file(write_file):
    path = write_file("viewbundle.yaml", "module_name: site\n")
    assert load_options_file(path, module_name="other").module_name == "other"
    assert load_options_file(path, module_name=None).module_name == "site"


def test_empty_file_gives_defaults(write_file):
    assert load_options_file(write_file("empty.yaml", "")).module_name == "views"


@pytest.mark.parametrize(
    "content",
    ["- a\n- b\n", "module_name: [unclosed\n", "minify: notabool\n"],
)
def test_invalid_files(write_file, content):
    with pytest.raises(ConfigurationError):
        load_options_file(write_file("bad.yaml", content))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_options_file(tmp_path / "absent.yaml")
