"""Compilation options, read from keyword arguments, the environment or YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class CompileOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VIEWBUNDLE_", case_sensitive=False, arbitrary_types_allowed=True
    )

    module_name: str = Field(default="views", min_length=1)
    minify: bool = False
    compilers: dict[str, Any] = Field(default_factory=dict)
    base_dir: Path | None = None
    module_dirs: list[str] = Field(default_factory=lambda: ["node_modules"])


def load_options_file(path: Path, **overrides: Any) -> CompileOptions:
    """Load compile options from a YAML file.

    Args:
        path: YAML document holding a mapping of option names to values
        **overrides: Values taking precedence over the file contents

    Returns:
        Validated compile options
    """
    if not path.exists():
        raise ConfigurationError(
            f"Options file not found: {path}", context={"path": path}
        )

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in {path}: {exc}", context={"path": path}
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Options file must contain a mapping: {path}", context={"path": path}
        )

    base_dir = data.get("base_dir")
    if base_dir is not None and not Path(base_dir).is_absolute():
        data["base_dir"] = path.parent / base_dir

    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CompileOptions(**data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid options in {path}: {exc}", context={"path": path}
        ) from exc
