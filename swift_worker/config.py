"""Incremental storage configuration from defaults, a YAML file, and the environment."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from .constants import ENV_INCREMENTAL_KINDS, ENV_INCREMENTAL_ROOT, ENV_INCREMENTAL_STRATEGY
from .types import IncrementalConfig

_ENV_FIELDS = {
    ENV_INCREMENTAL_ROOT: "storage_root",
    ENV_INCREMENTAL_KINDS: "redirected_kinds",
    ENV_INCREMENTAL_STRATEGY: "strategy",
}


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def _read_config_file(config_path: Path) -> dict[str, object]:
    content = config_path.read_text(encoding="utf-8")
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML in {config_path}: {err}") from err

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return raw


def load_config(config_path: Path | None = None) -> IncrementalConfig:
    """Build the incremental configuration.

    Values come from the defaults, then the optional YAML file, then the
    ``.env`` file, then ``os.environ``; later sources win.
    """
    values: dict[str, object] = {}
    if config_path is not None:
        values.update(_read_config_file(config_path))

    env_config = read_env_file(list(_ENV_FIELDS))
    for env_key, field in _ENV_FIELDS.items():
        value = os.environ.get(env_key) or env_config.get(env_key)
        if value:
            values[field] = value

    return IncrementalConfig.model_validate(values)
