"""Install rule categories into a project's rules directory."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from rulekit.documents.discovery import iter_rule_files, list_categories
from rulekit.install.copier import README_NAME, CopyAction, plan_flat


class CategoryNotFoundError(Exception):
    """Raised when a requested category directory does not exist."""


def available_rules(
    rules_dir: Path,
    labels: Dict[str, str],
    categories_dir: str = "categories",
) -> List[Tuple[str, str, List[str]]]:
    """Return ``(category, label, [rule file names])`` for listing.

    Labelled categories are always listed, in label order, even when empty;
    any other category directory follows alphabetically under its own name.
    """
    found = list_categories(rules_dir, categories_dir)
    listing: List[Tuple[str, str, List[str]]] = []
    for name, label in labels.items():
        listing.append((name, label, [p.name for p in found.get(name, [])]))
    for name, files in found.items():
        if name not in labels:
            listing.append((name, name, [p.name for p in files]))
    return listing


def plan_category(
    rules_dir: Path,
    target_dir: Path,
    category: str,
    categories_dir: str = "categories",
    claimed: Optional[Set[str]] = None,
) -> List[CopyAction]:
    """Plan a flat copy of one category's rule files.

    Share *claimed* between calls installing several categories into one
    target so equal file names are renamed rather than overwritten.
    """
    source = rules_dir / categories_dir / category
    if not source.is_dir():
        raise CategoryNotFoundError(f"Category '{category}' not found")
    return plan_flat(iter_rule_files(source), target_dir, claimed)


def plan_all(
    rules_dir: Path,
    target_dir: Path,
    categories_dir: str = "categories",
) -> List[CopyAction]:
    """Plan a flat copy of every categorised rule plus the rules README."""
    source = rules_dir / categories_dir
    files = iter_rule_files(source) if source.is_dir() else []
    actions = plan_flat(files, target_dir)
    readme = rules_dir / README_NAME
    if readme.is_file():
        actions.append(CopyAction(source=readme, target=target_dir / README_NAME, label=README_NAME))
    return actions


def rule_count(actions: List[CopyAction]) -> int:
    return sum(1 for a in actions if a.source.suffix == ".mdc")
