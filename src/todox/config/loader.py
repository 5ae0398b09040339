"""Load and merge configuration from .todox.toml and TODOX_* env vars."""

from __future__ import annotations

import dataclasses
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from todox.config.schema import (
    OUTPUT_FORMATS,
    CheckConfig,
    LintConfig,
    OutputConfig,
    ScanConfig,
    TodoxConfig,
)

CONFIG_FILENAME = ".todox.toml"

_TAG_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _freeze(value: Any) -> Any:
    """TOML arrays become tuples so the config value stays hashable."""
    if isinstance(value, list):
        return tuple(value)
    return value


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: _freeze(v) for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _split_csv(val: str) -> tuple[str, ...]:
    return tuple(v.strip() for v in val.split(",") if v.strip())


def _merge_env_overrides(cfg: TodoxConfig) -> TodoxConfig:
    """Apply TODOX_* environment variable overrides."""
    check = cfg.check
    if val := os.environ.get("TODOX_TAGS"):
        cfg = dataclasses.replace(cfg, tags=_split_csv(val))
    if val := os.environ.get("TODOX_EXCLUDE_DIRS"):
        cfg = dataclasses.replace(cfg, exclude_dirs=cfg.exclude_dirs + _split_csv(val))
    if val := os.environ.get("TODOX_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg = dataclasses.replace(cfg, output=OutputConfig(format=val))  # type: ignore[arg-type]
    if val := os.environ.get("TODOX_BLOCK_TAGS"):
        check = dataclasses.replace(check, block_tags=_split_csv(val))
    for env_name, field_name in (("TODOX_MAX", "max"), ("TODOX_MAX_NEW", "max_new")):
        if val := os.environ.get(env_name):
            try:
                check = dataclasses.replace(check, **{field_name: int(val)})
            except ValueError:
                pass
    return dataclasses.replace(cfg, check=check)


def _check_limit(value: Any, name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")


def _check_str_tuple(value: Any, name: str) -> None:
    if not isinstance(value, tuple) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name} must be a list of strings")


def validate_config(cfg: TodoxConfig) -> TodoxConfig:
    """Validate *cfg* and return it with tag names normalised to uppercase.

    Every regex in ``exclude_patterns`` is compiled here so a bad pattern
    aborts the run before any file is read.
    """
    _check_str_tuple(cfg.tags, "tags")
    _check_str_tuple(cfg.exclude_dirs, "exclude_dirs")
    _check_str_tuple(cfg.exclude_patterns, "exclude_patterns")
    _check_str_tuple(cfg.check.block_tags, "check.block_tags")

    if not cfg.tags:
        raise ConfigError("tags must not be empty")
    for tag in cfg.tags:
        if not _TAG_NAME_RE.match(tag):
            raise ConfigError(f"Invalid tag name: {tag!r}")

    for pattern in cfg.exclude_patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid exclude pattern {pattern!r}: {exc}") from exc

    _check_limit(cfg.check.max, "check.max")
    _check_limit(cfg.check.max_new, "check.max_new")
    _check_limit(cfg.lint.max_message_length, "lint.max_message_length")
    if cfg.scan.workers is not None:
        _check_limit(cfg.scan.workers, "scan.workers")
        if cfg.scan.workers == 0:
            raise ConfigError("scan.workers must be at least 1")
    if cfg.output.format is not None and cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    tags = tuple(dict.fromkeys(t.upper() for t in cfg.tags))
    block_tags = tuple(dict.fromkeys(t.upper() for t in cfg.check.block_tags))
    return dataclasses.replace(
        cfg,
        tags=tags,
        check=dataclasses.replace(cfg.check, block_tags=block_tags),
    )


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> TodoxConfig:
    """Load, validate, and return a TodoxConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = TodoxConfig()
    else:
        raw = _parse_toml(config_path)
        top = {
            k: _freeze(raw[k])
            for k in ("tags", "exclude_dirs", "exclude_patterns")
            if k in raw
        }
        try:
            cfg = TodoxConfig(
                version=str(raw.get("version", "1.0")),
                scan=_build_section(raw, ScanConfig, "scan"),
                check=_build_section(raw, CheckConfig, "check"),
                lint=_build_section(raw, LintConfig, "lint"),
                output=_build_section(raw, OutputConfig, "output"),
                **top,
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    cfg = _merge_env_overrides(cfg)
    return validate_config(cfg)
