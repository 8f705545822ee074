"""Configuration loading, schema, and defaults."""

from rulekit.config.loader import ConfigError, load_config
from rulekit.config.schema import RulekitConfig, Severity, severity_at_or_above

__all__ = [
    "ConfigError",
    "RulekitConfig",
    "Severity",
    "load_config",
    "severity_at_or_above",
]
