"""Locate the rules directory and the rule files inside it."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from rulekit.documents.models import RULE_SUFFIX

DEFAULT_RULES_DIR = ".cursor/rules"


def find_rules_dir(start: Optional[Path] = None, rules_dir: str = DEFAULT_RULES_DIR) -> Optional[Path]:
    """Search upward from *start* for a ``.cursor/rules`` directory.

    If none of the ancestors holds one but *start* itself lies inside a rules
    tree, the root of that tree is returned.
    """
    start = (start or Path.cwd()).resolve()

    for candidate in [start, *start.parents]:
        found = candidate / rules_dir
        if found.is_dir():
            return found

    marker = Path(rules_dir).parts
    parts = start.parts
    for idx in range(len(parts) - len(marker) + 1):
        if parts[idx : idx + len(marker)] == marker:
            root = Path(*parts[: idx + len(marker)])
            if root.is_dir():
                return root
    return None


def iter_rule_files(rules_dir: Path) -> List[Path]:
    """Return every ``*.mdc`` file below *rules_dir*, sorted."""
    return sorted(p for p in rules_dir.rglob(f"*{RULE_SUFFIX}") if p.is_file())


def list_categories(rules_dir: Path, categories_dir: str = "categories") -> Dict[str, List[Path]]:
    """Map each category directory name to the rule files it contains."""
    root = rules_dir / categories_dir
    if not root.is_dir():
        return {}
    return {
        child.name: iter_rule_files(child)
        for child in sorted(root.iterdir())
        if child.is_dir()
    }
