"""YAML config loader — reads restyle.yml into AppConfig."""

from pathlib import Path

import yaml

from restyle.schemas.config import AppConfig

DEFAULT_CONFIG_NAME = "restyle.yml"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate a config file.

    With no path, ``./restyle.yml`` is used when present and defaults
    otherwise. An explicit path that doesn't exist raises
    ``FileNotFoundError``; invalid content raises ``ValueError`` or
    ``pydantic.ValidationError``.
    """
    if path is None:
        default = Path(DEFAULT_CONFIG_NAME)
        if not default.exists():
            return AppConfig()
        path = default

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # An empty "models:" key loads as None.
    if raw.get("models") is None:
        raw.pop("models", None)

    return AppConfig(**raw)
