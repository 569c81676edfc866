"""Configuration loading helpers for Wayback Harvest."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import RunConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_ENV_VAR = "WAYBACK_HARVEST_CONFIG"


def _default_config_path() -> Path:
    return Path.home() / ".config" / "wayback-harvest" / "config.yaml"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


@dataclass(slots=True)
class ConfigLocator:
    """Resolve which defaults file, if any, applies to this run."""

    explicit_path: Path | None = None

    def resolve(self) -> Path | None:
        if self.explicit_path is not None:
            if not self.explicit_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.explicit_path}")
            return self.explicit_path
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path).expanduser()
            if not path.exists():
                raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to a missing file: {path}")
            return path
        default = _default_config_path()
        return default if default.exists() else None


class ConfigRepository:
    """Merge file defaults with command line overrides into a RunConfig."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()

    def load_defaults(self) -> dict[str, Any]:
        path = self.locator.resolve()
        if path is None:
            return {}
        if path.suffix not in CONFIG_EXTENSIONS:
            raise ValueError(f"Unsupported configuration file type: {path.suffix}")
        return _read_file(path)

    def build(self, overrides: Mapping[str, Any] | None = None) -> RunConfig:
        payload = self.load_defaults()
        for key, value in (overrides or {}).items():
            if value is not None:
                payload[key] = value
        return RunConfig.model_validate(payload)


def load_targets(path: Path) -> list[str]:
    """Read target domains from a file, one per line, keeping file order."""

    targets: list[str] = []
    with path.open("r", encoding="utf-8") as stream:
        for line in stream:
            entry = line.strip()
            if not entry or entry.startswith("#"):
                continue
            targets.append(entry)
    return targets


__all__ = ["CONFIG_ENV_VAR", "CONFIG_EXTENSIONS", "ConfigLocator", "ConfigRepository", "load_targets"]
