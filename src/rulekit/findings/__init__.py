"""Finding models and aggregation."""

from rulekit.findings.aggregator import deduplicate
from rulekit.findings.models import Finding, RawFinding, ValidationResult

__all__ = ["Finding", "RawFinding", "ValidationResult", "deduplicate"]
