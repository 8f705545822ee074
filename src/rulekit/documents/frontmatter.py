"""Frontmatter splitting and YAML parsing.

A rule document looks like::

    ---
    description: Use conventional commits
    globs: "*.py,*.ts"
    alwaysApply: false
    ---
    # Commit Messages 🛠️
    ...

The opening delimiter must be the first non-blank line. The block ends at the
next line consisting solely of ``---``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from rulekit.documents.models import RuleDocument

DELIMITER = "---"


class FrontmatterError(Exception):
    """Raised when a frontmatter block is not a valid YAML mapping."""


def split_frontmatter(text: str) -> Tuple[Optional[str], str, int]:
    """Split *text* into ``(frontmatter, body, body_start_line)``.

    Returns ``(None, text, 1)`` when there is no terminated, non-empty block.
    """
    lines = text.splitlines(keepends=True)

    opening: Optional[int] = None
    for idx, line in enumerate(lines):
        if not line.strip():
            continue
        if line.rstrip("\r\n") == DELIMITER:
            opening = idx
        break
    if opening is None:
        return None, text, 1

    for idx in range(opening + 1, len(lines)):
        if lines[idx].rstrip("\r\n") == DELIMITER:
            block = "".join(lines[opening + 1 : idx])
            if not block.strip():
                return None, text, 1
            body = "".join(lines[idx + 1 :])
            return block, body, idx + 2

    return None, text, 1


def parse_frontmatter(block: str) -> Dict[str, Any]:
    """Load a frontmatter block as a mapping.

    Raises FrontmatterError for YAML syntax errors and non-mapping documents.
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"YAML syntax error: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data


def load_document(path: Path, rules_dir: Optional[Path] = None) -> RuleDocument:
    """Read *path* and split it into a RuleDocument. Raises OSError if unreadable."""
    text = path.read_text(encoding="utf-8", errors="replace")
    frontmatter, body, body_start = split_frontmatter(text)

    relpath = path.name
    if rules_dir is not None:
        try:
            relpath = path.resolve().relative_to(rules_dir.resolve()).as_posix()
        except ValueError:
            relpath = path.as_posix()

    return RuleDocument(
        path=path,
        relpath=relpath,
        text=text,
        frontmatter=frontmatter,
        body=body,
        body_start=body_start,
    )
