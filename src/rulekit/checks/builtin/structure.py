"""Markdown structure checks: title, category emoji, expected sections."""

from __future__ import annotations

import re
from typing import Tuple

from rulekit.checks.models import Check, Issue
from rulekit.documents.models import RuleDocument

_TITLE_RE = re.compile(r"#\s")
_EMOJI_RE = re.compile(r"\s(?:🤖|🌍|🛠|🎯|⚡|🧠|🔥|💡|🚀|✨)")
_MOTIVATION_RE = re.compile(r"## Motivation", re.IGNORECASE)
_EXAMPLES_RE = re.compile(r"## Examples|### ✅|### ❌", re.IGNORECASE)


def title_line(document: RuleDocument) -> Tuple[int, str]:
    """Return ``(line_no, text)`` of the first non-blank body line, or ``(0, "")``."""
    for offset, line in enumerate(document.body.splitlines()):
        if line.strip():
            return document.body_start + offset, line
    return 0, ""


def _check_title(document, config):
    line_no, line = title_line(document)
    if not _TITLE_RE.match(line):
        yield Issue("Missing or invalid title (should start with '# ')", line_no=line_no)


def _check_title_emoji(document, config):
    line_no, line = title_line(document)
    if not _EMOJI_RE.search(line):
        yield Issue("Title missing category emoji (🤖🌍🛠️ recommended)", line_no=line_no)


def _check_motivation(document, config):
    if not _MOTIVATION_RE.search(document.body):
        yield Issue("No Motivation section found (recommended for rule clarity)")


def _check_examples(document, config):
    if not _EXAMPLES_RE.search(document.body):
        yield Issue("No Examples section found (recommended for rule understanding)")


TITLE = Check(
    id="TITLE",
    name="Document Title",
    description="The body opens with a level-one '# ' heading.",
    category="structure",
    severity="error",
    evaluate=_check_title,
)

TITLE_EMOJI = Check(
    id="TITLE_EMOJI",
    name="Title Category Emoji",
    description="The title carries a category emoji such as 🤖, 🌍 or 🛠️.",
    category="structure",
    severity="warning",
    evaluate=_check_title_emoji,
)

MOTIVATION_SECTION = Check(
    id="MOTIVATION_SECTION",
    name="Motivation Section",
    description="The body explains why the rule exists under '## Motivation'.",
    category="structure",
    severity="warning",
    evaluate=_check_motivation,
)

EXAMPLES_SECTION = Check(
    id="EXAMPLES_SECTION",
    name="Examples Section",
    description="The body shows '## Examples' or '### ✅' / '### ❌' cases.",
    category="structure",
    severity="warning",
    evaluate=_check_examples,
)

ALL_STRUCTURE_CHECKS = [TITLE, TITLE_EMOJI, MOTIVATION_SECTION, EXAMPLES_SECTION]
