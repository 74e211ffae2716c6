from __future__ import annotations

import sys
import types
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest

from viewbundle.core.config import build_app_config
from viewbundle.core.models import AppConfig
from viewbundle.rendering.bundler import MODULE_NAME_ATTR


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``tmp_path / relpath`` and return the path."""

    def _write(relpath: str, content: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def app_config() -> AppConfig:
    return build_app_config()


@pytest.fixture
def load_bundle() -> Iterator[Callable[..., types.ModuleType]]:
    """Import a compiled bundle from its source text.

    The module is registered in ``sys.modules`` under ``name`` or the name the
    bundle was exposed as, and removed again after the test.
    """
    loaded: list[str] = []

    def _load(artifact: str, name: Optional[str] = None) -> types.ModuleType:
        module = types.ModuleType(name or "views")
        exec(compile(artifact, f"<bundle {module.__name__}>", "exec"), module.__dict__)

        module.__name__ = name or module.__dict__.get(MODULE_NAME_ATTR, "views")
        sys.modules[module.__name__] = module
        loaded.append(module.__name__)
        return module

    yield _load

    for module_name in loaded:
        sys.modules.pop(module_name, None)
