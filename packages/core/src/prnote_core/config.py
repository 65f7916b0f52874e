import os
from pathlib import Path
from typing import Optional

import yaml

INPUT_NAMES = (
    "token",
    "file",
    "message",
    "mode",
    "prefix",
    "name",
    "title",
    "summary",
    "conclusion",
    "annotations",
)

DEFAULT_CONFIG: dict = {
    "token": None,
    "file": None,
    "message": None,
    "mode": "comment",
    "prefix": None,
    "name": None,
    "title": None,
    "summary": None,
    "conclusion": None,
    "annotations": None,  # path to a JSON array of check run annotations
}


def get_input(name: str, environ: Optional[dict] = None) -> str | None:
    """Read a GitHub Actions input from its ``INPUT_<NAME>`` environment variable.

    The runner exports inputs upper-cased with spaces replaced by underscores.
    Values are stripped; an empty value is returned as None.
    """
    env = os.environ if environ is None else environ
    value = env.get(f"INPUT_{name.replace(' ', '_').upper()}")
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config(
    config_path: str = ".prnote.yml",
    cli_overrides: Optional[dict] = None,
    environ: Optional[dict] = None,
) -> dict:
    """
    Load raw inputs by merging (in order of precedence):
      1. Built-in defaults
      2. .prnote.yml in the current directory
      3. GitHub Actions INPUT_* environment variables
      4. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update({key: _as_str(value) for key, value in file_config.items() if key in INPUT_NAMES})

    for name in INPUT_NAMES:
        value = get_input(name, environ)
        if value is not None:
            config[name] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def _as_str(value) -> str | None:
    # YAML turns `conclusion: success` into a str but `message: 42` into an int.
    if value is None:
        return None
    return str(value)
