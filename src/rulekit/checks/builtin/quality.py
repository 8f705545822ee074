"""Content quality checks: placeholders, line length, common typos."""

from __future__ import annotations

from rulekit.checks.models import Check, Issue

PLACEHOLDER = Check(
    id="PLACEHOLDER",
    name="Placeholder Text",
    description="Prose outside code blocks has no [TODO], [FIXME] or [...] placeholders.",
    category="quality",
    severity="error",
    pattern=r"\[TODO\]|\[PLACEHOLDER\]|\[FIXME\]|\[.*\.\.\.\]",
    scope="prose",
    message="Found {count} placeholder(s) - replace with actual content",
)


def _check_line_length(document, config):
    limit = config.validate.max_line_length
    long_lines = [n for n, line in enumerate(document.lines, 1) if len(line) > limit]
    if long_lines:
        yield Issue(
            f"Found {len(long_lines)} line(s) longer than {limit} characters",
            line_no=long_lines[0],
            count=len(long_lines),
        )


LONG_LINE = Check(
    id="LONG_LINE",
    name="Line Length",
    description="Lines stay within the configured maximum length.",
    category="quality",
    severity="warning",
    evaluate=_check_line_length,
)

TYPO = Check(
    id="TYPO",
    name="Common Typos",
    description="Flags frequently misspelled words.",
    category="quality",
    severity="warning",
    pattern=r"recieve|occured|seperate|accomodate",
    scope="text",
    ignore_case=True,
    message="Possible typos detected (check spelling)",
)

ALL_QUALITY_CHECKS = [PLACEHOLDER, LONG_LINE, TYPO]
