"""Layered TOML configuration for the webhook service.

Layers, lowest precedence first:

    config/default.toml          required
    config/{VOICEHOOK_ENV}.toml  optional, VOICEHOOK_ENV defaults to development
    hosting-platform variables   e.g. REDIS_URL, set outside our prefix

VOICEHOOK_* variables are applied on top of all of these by Settings.
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "VOICEHOOK_CONFIG_DIR"
ENVIRONMENT_VAR = "VOICEHOOK_ENV"
DEFAULT_ENVIRONMENT = "development"
BASE_LAYER = "default.toml"

# Unprefixed variables that hosting platforms inject, by config path
PLATFORM_VARIABLES: dict[str, tuple[str, ...]] = {
    "REDIS_URL": ("storage", "session", "redis_url"),
}


@dataclass(frozen=True)
class ConfigLayers:
    """Where configuration comes from for one process."""

    directory: Path
    environment: str

    @classmethod
    def discover(cls, environ: Mapping[str, str] | None = None) -> "ConfigLayers":
        """Locate the config directory and the active environment.

        An explicit VOICEHOOK_CONFIG_DIR must exist. Otherwise the working
        directory and its parents are searched for config/default.toml.

        Raises:
            FileNotFoundError: If no config directory can be found
        """
        environ = os.environ if environ is None else environ
        environment = environ.get(ENVIRONMENT_VAR) or DEFAULT_ENVIRONMENT

        explicit = environ.get(CONFIG_DIR_VAR)
        if explicit:
            directory = Path(explicit)
            if not directory.is_dir():
                raise FileNotFoundError(f"{CONFIG_DIR_VAR} does not exist: {explicit}")
            return cls(directory, environment)

        cwd = Path.cwd()
        for root in (cwd, *cwd.parents):
            if (root / "config" / BASE_LAYER).is_file():
                return cls(root / "config", environment)
        raise FileNotFoundError(f"No config/{BASE_LAYER} found above {cwd}")

    @property
    def files(self) -> list[Path]:
        """Layer files that exist, base first."""
        base = self.directory / BASE_LAYER
        if not base.is_file():
            raise FileNotFoundError(f"Missing base configuration: {base}")
        overlay = self.directory / f"{self.environment}.toml"
        return [base, overlay] if overlay.is_file() else [base]


def read_layer(path: Path) -> dict[str, Any]:
    """Parse one TOML layer.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))


def merge_layer(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Fold layer into target in place; tables merge, other values replace."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merge_layer(current, value)
        elif isinstance(value, Mapping):
            target[key] = merge_layer({}, value)
        else:
            target[key] = value
    return target


def platform_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Nested config built from PLATFORM_VARIABLES that are set."""
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for variable, path in PLATFORM_VARIABLES.items():
        value = environ.get(variable)
        if not value:
            continue
        *tables, leaf = path
        node = overrides
        for table in tables:
            node = node.setdefault(table, {})
        node[leaf] = value
    return overrides


def load_config(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Merge every layer into one dictionary for Settings.

    Raises:
        FileNotFoundError: If the config directory or default.toml is missing
    """
    layers = ConfigLayers.discover(environ)
    config: dict[str, Any] = {}
    for path in layers.files:
        merge_layer(config, read_layer(path))
    return merge_layer(config, platform_overrides(environ))
