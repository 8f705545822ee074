"""Check data model: pattern stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, List, Literal, Optional, Tuple

from rulekit.config.schema import Severity
from rulekit.documents.models import RuleDocument

if TYPE_CHECKING:
    from rulekit.config.schema import RulekitConfig

Scope = Literal["text", "prose", "body"]

CODE_FENCE = "```"


@dataclass(frozen=True)
class Issue:
    """One problem reported by a check."""

    message: str
    line_no: int = 0  # 0 = whole file
    count: int = 1


Evaluator = Callable[[RuleDocument, "RulekitConfig"], Iterable[Issue]]


def prose_lines(lines: List[str]) -> List[Tuple[int, str]]:
    """Number *lines* from 1 and drop fenced code blocks.

    A block starts at any line containing a fence and runs through the next
    line containing one (or to the end of the file).
    """
    kept: List[Tuple[int, str]] = []
    in_block = False
    for line_no, line in enumerate(lines, 1):
        if in_block:
            if CODE_FENCE in line:
                in_block = False
            continue
        if CODE_FENCE in line:
            in_block = True
            continue
        kept.append((line_no, line))
    return kept


def scoped_lines(document: RuleDocument, scope: Scope) -> List[Tuple[int, str]]:
    """Return ``(line_no, line)`` pairs for *scope*, numbered within the file."""
    if scope == "prose":
        return prose_lines(document.lines)
    if scope == "body":
        offset = document.body_start
        return [(offset + i, line) for i, line in enumerate(document.body.splitlines())]
    return list(enumerate(document.lines, 1))


@dataclass
class Check:
    """A single validation check.

    Either ``pattern`` (a regex counted per line over ``scope``) or
    ``evaluate`` (a callable returning issues) drives the check. The compiled
    regex is built lazily on first access via ``compiled_pattern``.
    """

    id: str
    name: str
    description: str
    category: str  # naming | frontmatter | structure | quality
    severity: Severity
    pattern: Optional[str] = None
    scope: Scope = "text"
    ignore_case: bool = False
    message: Optional[str] = None  # may reference {count}
    evaluate: Optional[Evaluator] = field(default=None, repr=False, compare=False)
    enabled: bool = True

    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> Optional[re.Pattern[str]]:
        if self.pattern is None:
            return None
        if self._compiled_pattern is None:
            flags = re.IGNORECASE if self.ignore_case else 0
            self._compiled_pattern = re.compile(self.pattern, flags)
        return self._compiled_pattern

    @property
    def is_pattern_check(self) -> bool:
        return self.evaluate is None and self.pattern is not None

    def run(self, document: RuleDocument, config: "RulekitConfig") -> List[Issue]:
        if self.evaluate is not None:
            return list(self.evaluate(document, config))

        cp = self.compiled_pattern
        if cp is None:
            return []
        hits = [n for n, line in scoped_lines(document, self.scope) if cp.search(line)]
        if not hits:
            return []
        template = self.message or f"{self.name}: {{count}} matching line(s)"
        return [Issue(template.format(count=len(hits)), line_no=hits[0], count=len(hits))]
