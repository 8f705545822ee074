"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class RawFinding:
    """A single issue produced by the validator (before dedup)."""

    check_id: str
    check_name: str
    severity: str
    category: str
    file: str
    line_no: int
    message: str
    count: int = 1


@dataclass
class Finding:
    """Deduplicated, severity-gated finding for output."""

    id: str  # e.g. FINDING-001
    check_id: str
    check_name: str
    severity: str
    category: str
    file: str
    line_no: int
    message: str
    count: int = 1
    is_blocking: bool = True  # does this finding cause exit code 1?


@dataclass
class ValidationResult:
    """Complete result of a validation run."""

    findings: List[Finding] = field(default_factory=list)
    checked_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    blocked: bool = False
    strict: bool = False
    duration_ms: float = 0.0

    @property
    def files_checked(self) -> int:
        return len(self.checked_files)

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def errors(self) -> int:
        return sum(1 for f in self.findings if f.severity == "error")

    @property
    def warnings(self) -> int:
        return sum(1 for f in self.findings if f.severity == "warning")

    @property
    def blocking_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.is_blocking]

    def findings_for(self, file: str) -> List[Finding]:
        return [f for f in self.findings if f.file == file]
