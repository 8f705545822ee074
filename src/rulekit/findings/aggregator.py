"""Finding deduplication and severity gating."""

from __future__ import annotations

from typing import Dict, List, Tuple

from rulekit.config.schema import severity_at_or_above
from rulekit.findings.models import Finding, RawFinding


def deduplicate(raw_findings: List[RawFinding], fail_on: str) -> List[Finding]:
    """Deduplicate raw findings and apply severity gate.

    Dedup key: (check_id, file, line_no, message); repeats are dropped.
    A finding blocks when its severity is at or above *fail_on*, so
    ``fail_on="warning"`` makes every finding blocking.
    """
    merged: Dict[Tuple[str, str, int, str], Finding] = {}
    counter = 0

    for raw in raw_findings:
        key = (raw.check_id, raw.file, raw.line_no, raw.message)

        if key in merged:
            continue

        counter += 1
        merged[key] = Finding(
            id=f"FINDING-{counter:03d}",
            check_id=raw.check_id,
            check_name=raw.check_name,
            severity=raw.severity,
            category=raw.category,
            file=raw.file,
            line_no=raw.line_no,
            message=raw.message,
            count=raw.count,
            is_blocking=severity_at_or_above(raw.severity, fail_on),
        )

    return list(merged.values())
