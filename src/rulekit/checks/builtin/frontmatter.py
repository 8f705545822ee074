"""Frontmatter checks: presence, YAML syntax, required fields, field types.

The checks are layered: a file without frontmatter only trips
FRONTMATTER_MISSING, and a block that fails to parse only trips
FRONTMATTER_YAML.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from rulekit.checks.models import Check, Issue
from rulekit.documents.frontmatter import FrontmatterError
from rulekit.documents.models import RuleDocument


def _mapping(document: RuleDocument) -> Optional[Dict[str, Any]]:
    if document.frontmatter is None:
        return None
    try:
        return document.data
    except FrontmatterError:
        return None


def _check_missing(document, config):
    if document.frontmatter is None:
        yield Issue("Missing frontmatter", line_no=1)


def _check_yaml(document, config):
    if document.frontmatter is None:
        return
    try:
        document.data
    except FrontmatterError as exc:
        yield Issue(str(exc), line_no=document.frontmatter_start)


def _check_required(document, config):
    data = _mapping(document)
    if data is None:
        return
    for name in config.validate.required_fields:
        if name not in data:
            yield Issue(f"Missing required field: {name}", line_no=document.frontmatter_start)


def _check_recommended(document, config):
    data = _mapping(document)
    if data is None:
        return
    for name in config.validate.recommended_fields:
        if name not in data:
            yield Issue(
                f"Missing {name} field (optional but recommended)",
                line_no=document.frontmatter_start,
            )


def _check_types(document, config):
    data = _mapping(document)
    if data is None:
        return

    if "description" in data and not isinstance(data["description"], str):
        yield Issue("description should be a string", line_no=document.field_line("description"))

    if "alwaysApply" in data and not isinstance(data["alwaysApply"], bool):
        yield Issue("alwaysApply should be true or false", line_no=document.field_line("alwaysApply"))

    globs = data.get("globs")
    valid_globs = (
        globs is None
        or isinstance(globs, str)
        or (isinstance(globs, list) and all(isinstance(g, str) for g in globs))
    )
    if not valid_globs:
        yield Issue("globs should be a string or a list of strings", line_no=document.field_line("globs"))


FRONTMATTER_MISSING = Check(
    id="FRONTMATTER_MISSING",
    name="Frontmatter Present",
    description="Rule files start with a YAML frontmatter block between --- lines.",
    category="frontmatter",
    severity="error",
    evaluate=_check_missing,
)

FRONTMATTER_YAML = Check(
    id="FRONTMATTER_YAML",
    name="Frontmatter YAML",
    description="The frontmatter block parses as a YAML mapping.",
    category="frontmatter",
    severity="error",
    evaluate=_check_yaml,
)

REQUIRED_FIELD = Check(
    id="REQUIRED_FIELD",
    name="Required Frontmatter Field",
    description="Required frontmatter fields (description by default) are present.",
    category="frontmatter",
    severity="error",
    evaluate=_check_required,
)

RECOMMENDED_FIELD = Check(
    id="RECOMMENDED_FIELD",
    name="Recommended Frontmatter Field",
    description="Recommended frontmatter fields (globs, alwaysApply) are present.",
    category="frontmatter",
    severity="warning",
    evaluate=_check_recommended,
)

FIELD_TYPE = Check(
    id="FIELD_TYPE",
    name="Frontmatter Field Type",
    description="description is text, alwaysApply is a boolean, globs is text or a list.",
    category="frontmatter",
    severity="warning",
    evaluate=_check_types,
)

ALL_FRONTMATTER_CHECKS = [
    FRONTMATTER_MISSING,
    FRONTMATTER_YAML,
    REQUIRED_FIELD,
    RECOMMENDED_FIELD,
    FIELD_TYPE,
]
