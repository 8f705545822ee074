"""Load and merge configuration from .rulekit.toml, CLI flags, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from rulekit.config.schema import (
    CIConfig,
    ChecksConfig,
    CLIConfig,
    IgnoreConfig,
    InstallConfig,
    OutputConfig,
    RulekitConfig,
    RulesConfig,
    ValidateConfig,
)

CONFIG_FILENAME = ".rulekit.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(project_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = project_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: RulekitConfig) -> None:
    """Apply RULEKIT_* environment variable overrides."""
    if val := os.environ.get("RULEKIT_FAIL_ON"):
        if val in ("warning", "error"):
            cfg.validate.fail_on = val  # type: ignore[assignment]
    if os.environ.get("RULEKIT_STRICT") == "1":
        cfg.validate.fail_on = "warning"
    if val := os.environ.get("RULEKIT_FORMAT"):
        if val in ("terminal", "json", "sarif"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("RULEKIT_DISABLE_CHECKS"):
        cfg.checks.disable.extend(c.strip() for c in val.split(",") if c.strip())
    if val := os.environ.get("RULEKIT_IGNORE_FILES"):
        cfg.ignore.files.extend(p.strip() for p in val.split(os.pathsep) if p.strip())
    if val := os.environ.get("RULEKIT_MAX_LINE_LENGTH"):
        try:
            cfg.validate.max_line_length = int(val)
        except ValueError:
            pass


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    section_data = data.get(section, {})
    if not isinstance(section_data, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in section_data.items() if k in valid_fields}
    return cls(**filtered)


def _build_install(data: Dict[str, Any]) -> InstallConfig:
    install = _build_section(data, InstallConfig, "install")
    # user labels extend the defaults rather than replacing them
    labels = dict(InstallConfig().labels)
    labels.update(install.labels)
    install.labels = labels
    return install


def load_config(
    project_root: Path,
    config_override: Optional[str] = None,
) -> RulekitConfig:
    """Load, validate, and return a RulekitConfig."""
    config_path = find_config_file(project_root, config_override)

    if config_path is None:
        cfg = RulekitConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = RulekitConfig(
            version=raw.get("version", "1.0"),
            rules=_build_section(raw, RulesConfig, "rules"),
            validate=_build_section(raw, ValidateConfig, "validate"),
            checks=_build_section(raw, ChecksConfig, "checks"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            output=_build_section(raw, OutputConfig, "output"),
            install=_build_install(raw),
            cli=_build_section(raw, CLIConfig, "cli"),
            ci=_build_section(raw, CIConfig, "ci"),
        )

    if cfg.validate.fail_on not in ("warning", "error"):
        raise ConfigError(f"Invalid validate.fail_on: {cfg.validate.fail_on!r}")

    _merge_env_overrides(cfg)
    return cfg
