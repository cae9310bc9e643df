"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import MAX_RETENTION_DAYS, MIN_RETENTION_DAYS, DirectorySettings, LogRCConfig


def resolve_with_precedence(
    *,
    defaults: LogRCConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> LogRCConfig:
    """Merge configuration sources: defaults, file, environment, then CLI."""
    merged = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        overrides = _normalize_mapping(source, source_name=name)
        merged = _deep_merge(merged, overrides)

    try:
        return LogRCConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def check_directory(entry: DirectorySettings) -> list[str]:
    """Return the problems that make a directory entry unusable.

    Args:
        entry: Directory entry loaded from the configuration file.

    Returns:
        list[str]: Human-readable problems; empty when the entry is valid.
    """
    problems: list[str] = []
    if not Path(entry.path).is_dir():
        problems.append(
            f"[directory]path setting should be an existing directory but is set to '{entry.path}'."
        )
    if not entry.filename_contains.strip():
        problems.append(
            f"[directory]filename_contains setting should not be blank for the path '{entry.path}'"
        )
    elif "_" in entry.filename_contains:
        problems.append(
            f"[directory]filename_contains setting should not contain a '_' for the path '{entry.path}'"
        )
    if not MIN_RETENTION_DAYS <= entry.retention_days <= MAX_RETENTION_DAYS:
        problems.append(
            f"[directory]retention_days setting should be a number between "
            f"{MIN_RETENTION_DAYS}-{MAX_RETENTION_DAYS} for Path '{entry.path}', "
            f"Name '{entry.filename_contains}'"
        )
    return problems


def _normalize_mapping(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in dict(source).items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        _assign(result, key.split("."), value, source_name=source_name)
    return result


def _assign(target: dict[str, Any], path: list[str], value: Any, *, source_name: str) -> None:
    node = target
    for segment in path[:-1]:
        existing = node.get(segment)
        if existing is None:
            existing = {}
            node[segment] = existing
        elif not isinstance(existing, dict):
            joined = ".".join(path)
            raise ConfigError(
                f"{source_name.capitalize()} override for {joined} conflicts with existing value."
            )
        node = existing
    leaf = path[-1]
    if isinstance(value, MappingABC):
        nested = _normalize_mapping(value, source_name=source_name)
        existing_leaf = node.get(leaf, {})
        if not isinstance(existing_leaf, MappingABC):
            existing_leaf = {}
        node[leaf] = _deep_merge(existing_leaf, nested)
    else:
        node[leaf] = value


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        if isinstance(value, MappingABC) and isinstance(merged.get(key), MappingABC):
            merged[key] = _deep_merge(dict(merged[key]), value)  # type: ignore[arg-type]
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["resolve_with_precedence", "check_directory"]
