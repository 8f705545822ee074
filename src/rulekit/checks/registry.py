"""Check registry: loads built-in and custom checks, applies config filters."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from rulekit.checks.models import Check
from rulekit.config.schema import RulekitConfig

CUSTOM_CHECKS_DIR = ".rulekit-checks"


class CheckLoadError(Exception):
    """Raised when a custom check file is malformed."""


class CheckRegistry:
    """Central store for all validation checks."""

    def __init__(self) -> None:
        self._checks: Dict[str, Check] = {}

    # ---- registration ----

    def register(self, check: Check) -> None:
        self._checks[check.id] = check

    def register_many(self, checks: list[Check]) -> None:
        for c in checks:
            self.register(c)

    # ---- queries ----

    @property
    def all_checks(self) -> List[Check]:
        return list(self._checks.values())

    def get(self, check_id: str) -> Optional[Check]:
        return self._checks.get(check_id)

    def enabled_checks(self) -> List[Check]:
        return [c for c in self._checks.values() if c.enabled]

    # ---- config filtering ----

    def apply_config(self, config: RulekitConfig) -> None:
        """Enable / disable checks based on config.checks."""
        enable_list = config.checks.enable
        disable_list = config.checks.disable

        for check in self._checks.values():
            if enable_list:
                check.enabled = check.id in enable_list
            # Disable list always takes precedence
            if check.id in disable_list:
                check.enabled = False

    # ---- custom check loading ----

    def load_custom_checks(self, directory: Path) -> int:
        """Load YAML check files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_checks(path)
        return count

    def _load_yaml_checks(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise CheckLoadError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry or "pattern" not in entry:
                raise CheckLoadError(f"{path}: each check needs an 'id' and a 'pattern'")
            severity = entry.get("severity", "warning")
            if severity not in ("warning", "error"):
                raise CheckLoadError(f"{path}: invalid severity {severity!r} for {entry['id']}")
            scope = entry.get("scope", "prose")
            if scope not in ("text", "prose", "body"):
                raise CheckLoadError(f"{path}: invalid scope {scope!r} for {entry['id']}")
            check = Check(
                id=entry["id"],
                name=entry.get("name", entry["id"]),
                description=entry.get("description", ""),
                category=entry.get("category", "quality"),
                severity=severity,
                pattern=entry["pattern"],
                scope=scope,
                ignore_case=bool(entry.get("ignore_case", False)),
                message=entry.get("message"),
            )
            self.register(check)
            count += 1
        return count


def build_registry(config: RulekitConfig, project_root: Path) -> CheckRegistry:
    """Create a fully populated, config-filtered check registry."""
    from rulekit.checks.builtin import ALL_BUILTIN_CHECKS

    registry = CheckRegistry()
    # fresh copies: apply_config mutates ``enabled``
    registry.register_many([replace(c) for c in ALL_BUILTIN_CHECKS])

    registry.load_custom_checks(project_root / CUSTOM_CHECKS_DIR)

    registry.apply_config(config)

    for check in registry.enabled_checks():
        _ = check.compiled_pattern

    return registry
