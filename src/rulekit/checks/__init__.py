"""Check engine: models, registry, built-in checks."""

from rulekit.checks.models import Check, Issue
from rulekit.checks.registry import CheckLoadError, CheckRegistry, build_registry

__all__ = ["Check", "CheckLoadError", "CheckRegistry", "Issue", "build_registry"]
