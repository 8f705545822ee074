"""Built-in checks: aggregate all categories."""

from rulekit.checks.builtin.frontmatter import ALL_FRONTMATTER_CHECKS
from rulekit.checks.builtin.naming import ALL_NAMING_CHECKS
from rulekit.checks.builtin.quality import ALL_QUALITY_CHECKS
from rulekit.checks.builtin.structure import ALL_STRUCTURE_CHECKS
from rulekit.checks.models import Check

ALL_BUILTIN_CHECKS: list[Check] = [
    *ALL_NAMING_CHECKS,
    *ALL_FRONTMATTER_CHECKS,
    *ALL_STRUCTURE_CHECKS,
    *ALL_QUALITY_CHECKS,
]

__all__ = ["ALL_BUILTIN_CHECKS"]
