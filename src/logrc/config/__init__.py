"""Configuration management for LogRC."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import ApplicationSettings, DirectorySettings, LoggingSettings, LogRCConfig
from .resolver import check_directory, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("logrc.yaml")
CONFIG_PATH_ENV = "LOGRC_CONFIG"
ENV_PREFIX = "LOGRC__"
_CONFIG_HEADER = textwrap.dedent(
    """\
    # LogRC configuration file
    # Add one entry under `directories` for every folder whose logs should be maintained.
    """
)


class ConfigManager:
    """Load and persist configuration data, applying precedence rules."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._env = env if env is not None else os.environ
        if config_path is None:
            env_path = self._env.get(CONFIG_PATH_ENV)
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        self._config_path = config_path.expanduser()

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> LogRCConfig:
        """Load configuration data from disk, applying precedence rules.

        Raises:
            ConfigError: If the file is missing, unreadable, or invalid.
        """
        if not self._config_path.exists():
            raise ConfigError(f"Configuration file not found: {self._config_path}")

        env_overrides = self._extract_env(self._env) if include_env else None
        return resolve_with_precedence(
            defaults=LogRCConfig(),
            file_overrides=self._read_file(),
            env_overrides=env_overrides or None,
            cli_overrides=cli_overrides,
        )

    def ensure_exists(self) -> Path:
        """Create a configuration file with defaults if one does not exist."""
        path = self._config_path
        if not path.exists():
            self._write_file(LogRCConfig().model_dump(mode="python"))
        return path

    # Internal helpers -------------------------------------------------

    def _read_file(self) -> dict[str, Any]:
        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise ConfigError(f"Failed to read configuration file: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        return raw

    def _write_file(self, data: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = yaml.safe_dump(dict(data), sort_keys=False)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        timestamp = f"# Last updated: {stamp}\n"
        self._config_path.write_text(_CONFIG_HEADER + timestamp + serialized, encoding="utf-8")

    def _extract_env(self, env: Mapping[str, str]) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for key, raw_value in env.items():
            if not key.startswith(ENV_PREFIX):
                continue
            path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
            if not path:
                continue
            try:
                parsed_value = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                parsed_value = raw_value

            node = overrides
            for segment in path[:-1]:
                node = node.setdefault(segment, {})
            node[path[-1]] = parsed_value

        return overrides


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_PATH_ENV",
    "ApplicationSettings",
    "DirectorySettings",
    "LoggingSettings",
    "LogRCConfig",
    "check_directory",
    "resolve_with_precedence",
    "ConfigError",
]
