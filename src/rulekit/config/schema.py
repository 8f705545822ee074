"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal

Severity = Literal["warning", "error"]

SEVERITY_ORDER: dict[str, int] = {
    "warning": 0,
    "error": 1,
}


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


DEFAULT_CATEGORY_LABELS: Dict[str, str] = {
    "ai-behavior": "🤖 AI Behavior Rules",
    "project-standards": "🌍 Project Standards",
    "tools": "🛠️ Tool Management",
}


@dataclass
class RulesConfig:
    dir: str = ".cursor/rules"
    categories_dir: str = "categories"


@dataclass
class ValidateConfig:
    fail_on: Severity = "error"  # "warning" == strict mode
    max_line_length: int = 120
    required_fields: List[str] = field(default_factory=lambda: ["description"])
    recommended_fields: List[str] = field(
        default_factory=lambda: ["globs", "alwaysApply"]
    )


@dataclass
class ChecksConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class IgnoreConfig:
    files: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    format: Literal["terminal", "json", "sarif"] = "terminal"
    show_summary: bool = True


@dataclass
class InstallConfig:
    target: str = ".cursor/rules"
    labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CATEGORY_LABELS))


@dataclass
class CLIConfig:
    install_dir: str = "~/.local/bin"
    shell_config: str = "~/.zshrc"
    tool_name: str = "copy-cursor-rules"


@dataclass
class CIConfig:
    annotation_format: Literal["github", "none"] = "none"


@dataclass
class RulekitConfig:
    version: str = "1.0"
    rules: RulesConfig = field(default_factory=RulesConfig)
    validate: ValidateConfig = field(default_factory=ValidateConfig)
    checks: ChecksConfig = field(default_factory=ChecksConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    install: InstallConfig = field(default_factory=InstallConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    @property
    def strict(self) -> bool:
        return self.validate.fail_on == "warning"
