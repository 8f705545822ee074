"""SARIF v2.1.0 reporter: GitHub Code Scanning upload."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from rulekit import __version__
from rulekit.findings.models import ValidationResult

_SEVERITY_MAP = {
    "error": "error",
    "warning": "warning",
}


def to_dict(result: ValidationResult, *, uri_base: str = "") -> Dict[str, Any]:
    """Convert ValidationResult to a SARIF v2.1.0 dict.

    *uri_base* is prefixed to every file path (e.g. ``.cursor/rules/``) so
    locations resolve relative to the repository root.
    """
    rules: List[Dict[str, Any]] = []
    seen_rules: set[str] = set()
    results: List[Dict[str, Any]] = []

    for f in result.findings:
        if f.check_id not in seen_rules:
            seen_rules.add(f.check_id)
            rules.append({
                "id": f.check_id,
                "name": f.check_name,
                "shortDescription": {"text": f.check_name},
                "defaultConfiguration": {
                    "level": _SEVERITY_MAP.get(f.severity, "warning"),
                },
                "properties": {"category": f.category},
            })

        results.append({
            "ruleId": f.check_id,
            # strict mode escalates warnings to errors
            "level": "error" if f.is_blocking else _SEVERITY_MAP.get(f.severity, "warning"),
            "message": {"text": f.message},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": f"{uri_base}{f.file}"},
                        "region": {"startLine": max(f.line_no, 1)},
                    }
                }
            ],
        })

    return {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "rulekit",
                        "version": __version__,
                        "rules": rules,
                    }
                },
                "results": results,
            }
        ],
    }


def render(result: ValidationResult, *, uri_base: str = "") -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(result, uri_base=uri_base), indent=2, ensure_ascii=False)
