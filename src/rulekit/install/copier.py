"""Copy rule files between projects: structured or flattened."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set

from rulekit.documents.discovery import find_rules_dir, iter_rule_files

README_NAME = "README.md"
FLAT_README_NAME = "cursor-rules-README.md"


class CopyError(Exception):
    """Raised when a file cannot be copied."""


class SourceNotFoundError(CopyError):
    """Raised when no rules directory can be located."""


class PermissionDeniedError(CopyError):
    """Raised when the source is unreadable or the target unwritable."""


@dataclass(frozen=True)
class CopyAction:
    """One planned file copy."""

    source: Path
    target: Path
    label: str  # path shown to the user, relative to the target
    renamed_from: Optional[str] = None  # original name when a conflict forced a rename


def resolve_source(
    override: Optional[str] = None,
    start: Optional[Path] = None,
    rules_dir: str = ".cursor/rules",
) -> Path:
    """Return the source rules directory, searching upward when not given."""
    if override:
        source = Path(override).expanduser()
        if not source.is_dir():
            raise SourceNotFoundError(f"Source directory not found: {source}")
        return source.resolve()

    found = find_rules_dir(start, rules_dir)
    if found is None:
        raise SourceNotFoundError(
            f"Could not find {rules_dir} directory in current path hierarchy"
        )
    return found


def prepare_target(target_dir: Path, *, dry_run: bool = False) -> bool:
    """Create *target_dir* if missing. Returns True if it was (or would be) created."""
    if target_dir.is_dir():
        return False
    if dry_run:
        return True
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PermissionDeniedError(f"Failed to create target directory: {target_dir}") from exc
    return True


def check_permissions(source_dir: Path, target_dir: Path, *, dry_run: bool = False) -> None:
    if not os.access(source_dir, os.R_OK):
        raise PermissionDeniedError(f"No read permission for source directory: {source_dir}")
    if not dry_run and not os.access(target_dir, os.W_OK):
        raise PermissionDeniedError(f"No write permission for target directory: {target_dir}")


def plan_structured(source_dir: Path, target_dir: Path) -> List[CopyAction]:
    """Plan a copy of every rule file and README.md, keeping relative paths."""
    files = sorted(
        p for p in source_dir.rglob("*")
        if p.is_file() and (p.suffix == ".mdc" or p.name == README_NAME)
    )
    actions: List[CopyAction] = []
    for path in files:
        rel = path.relative_to(source_dir).as_posix()
        actions.append(CopyAction(source=path, target=target_dir / rel, label=rel))
    return actions


def _free_name(path: Path, claimed: Set[str]) -> str:
    """Return a name for *path* not yet in *claimed*.

    Tries ``<parent-dir>-<name>`` first, then appends ``-2``, ``-3``, ... to
    the stem until the name is free.
    """
    stem = f"{path.parent.name}-{path.stem}"
    name = f"{stem}{path.suffix}"
    n = 2
    while name in claimed:
        name = f"{stem}-{n}{path.suffix}"
        n += 1
    return name


def plan_flat(
    files: Iterable[Path],
    target_dir: Path,
    claimed: Optional[Set[str]] = None,
) -> List[CopyAction]:
    """Plan copies of *files* into the root of *target_dir*.

    When a file name was already used in this run, the copy is renamed to
    ``<parent-dir>-<name>`` (with a numeric suffix if that is taken too).
    Pass the same *claimed* set to several calls that write into one target.
    Files already in the target are overwritten.
    """
    actions: List[CopyAction] = []
    if claimed is None:
        claimed = set()
    for path in files:
        name = path.name
        renamed_from = None
        if name in claimed:
            renamed_from = name
            name = _free_name(path, claimed)
        claimed.add(name)
        actions.append(
            CopyAction(source=path, target=target_dir / name, label=name, renamed_from=renamed_from)
        )
    return actions


def plan_flattened(source_dir: Path, target_dir: Path) -> List[CopyAction]:
    """Plan a flattened copy: every rule file plus README as cursor-rules-README.md."""
    actions = plan_flat(iter_rule_files(source_dir), target_dir)
    readme = source_dir / README_NAME
    if readme.is_file():
        actions.append(
            CopyAction(source=readme, target=target_dir / FLAT_README_NAME, label=FLAT_README_NAME)
        )
    return actions


def copy_file(action: CopyAction) -> None:
    """Perform *action*, creating parent directories."""
    try:
        action.target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(action.source, action.target)
    except OSError as exc:
        raise CopyError(f"Failed to copy: {action.label} ({exc.strerror or exc})") from exc
