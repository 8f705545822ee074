"""Rule documents: models, frontmatter parsing, discovery."""

from rulekit.documents.discovery import find_rules_dir, iter_rule_files, list_categories
from rulekit.documents.frontmatter import (
    FrontmatterError,
    load_document,
    parse_frontmatter,
    split_frontmatter,
)
from rulekit.documents.models import RuleDocument, RuleMetadata

__all__ = [
    "FrontmatterError",
    "RuleDocument",
    "RuleMetadata",
    "find_rules_dir",
    "iter_rule_files",
    "list_categories",
    "load_document",
    "parse_frontmatter",
    "split_frontmatter",
]
