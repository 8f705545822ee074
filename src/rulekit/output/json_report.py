"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from rulekit.findings.models import ValidationResult


def to_dict(result: ValidationResult) -> Dict[str, Any]:
    """Convert ValidationResult to a JSON-serialisable dict."""
    findings_list: List[Dict[str, Any]] = []
    for f in result.findings:
        findings_list.append({
            "id": f.id,
            "check": f.check_id,
            "check_name": f.check_name,
            "severity": f.severity,
            "category": f.category,
            "file": f.file,
            "line": f.line_no,
            "message": f.message,
            "is_blocking": f.is_blocking,
            **({"count": f.count} if f.count > 1 else {}),
        })

    return {
        "version": "1.0",
        "files_checked": result.files_checked,
        "errors": result.errors,
        "warnings": result.warnings,
        "strict": result.strict,
        "blocked": result.blocked,
        "findings": findings_list,
        "checked_files": result.checked_files,
        "skipped_files": result.skipped_files,
        "duration_ms": result.duration_ms,
    }


def render(result: ValidationResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2, ensure_ascii=False)
