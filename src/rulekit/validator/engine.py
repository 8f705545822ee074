"""Core validation engine: runs every enabled check over every rule file."""

from __future__ import annotations

import time
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional, Sequence

from rulekit.checks.registry import CheckRegistry
from rulekit.config.schema import RulekitConfig
from rulekit.documents.frontmatter import load_document
from rulekit.findings.aggregator import deduplicate
from rulekit.findings.models import RawFinding, ValidationResult

UNREADABLE_CHECK_ID = "FILE_UNREADABLE"


class ValidationError(Exception):
    """Raised when a check fails internally (not when a rule file is invalid)."""


def _relpath(path: Path, rules_dir: Optional[Path]) -> str:
    if rules_dir is not None:
        try:
            return path.resolve().relative_to(rules_dir.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def _is_ignored(relpath: str, globs: Sequence[str]) -> bool:
    name = Path(relpath).name
    return any(fnmatch(relpath, g) or fnmatch(name, g) for g in globs)


def _unreadable(relpath: str, reason: str) -> RawFinding:
    return RawFinding(
        check_id=UNREADABLE_CHECK_ID,
        check_name="Readable File",
        severity="error",
        category="naming",
        file=relpath,
        line_no=0,
        message=reason,
    )


def validate(
    files: Sequence[Path],
    config: RulekitConfig,
    registry: CheckRegistry,
    rules_dir: Optional[Path] = None,
) -> ValidationResult:
    """Validate *files* against the enabled checks. Returns a ValidationResult."""
    start = time.perf_counter()

    checks = registry.enabled_checks()
    raw_findings: List[RawFinding] = []
    checked_files: List[str] = []
    skipped_files: List[str] = []
    seen: set[Path] = set()

    for path in files:
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)

        relpath = _relpath(path, rules_dir)

        if _is_ignored(relpath, config.ignore.files):
            skipped_files.append(f"{relpath} (ignored)")
            continue

        if not path.is_file():
            raw_findings.append(_unreadable(relpath, "File not found or not readable"))
            continue

        try:
            document = load_document(path, rules_dir)
        except OSError as exc:
            raw_findings.append(_unreadable(relpath, f"File not readable: {exc.strerror or exc}"))
            continue

        checked_files.append(document.relpath)

        for check in checks:
            try:
                issues = check.run(document, config)
            except Exception as exc:
                raise ValidationError(
                    f"Check {check.id} failed on {document.relpath}: {exc}"
                ) from exc

            for issue in issues:
                raw_findings.append(
                    RawFinding(
                        check_id=check.id,
                        check_name=check.name,
                        severity=check.severity,
                        category=check.category,
                        file=document.relpath,
                        line_no=issue.line_no,
                        message=issue.message,
                        count=issue.count,
                    )
                )

    findings = deduplicate(raw_findings, config.validate.fail_on)
    blocked = any(f.is_blocking for f in findings)

    elapsed = (time.perf_counter() - start) * 1000

    return ValidationResult(
        findings=findings,
        checked_files=checked_files,
        skipped_files=skipped_files,
        blocked=blocked,
        strict=config.strict,
        duration_ms=round(elapsed, 2),
    )
