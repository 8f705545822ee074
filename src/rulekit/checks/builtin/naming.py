"""File naming checks: kebab-case stem and .mdc extension."""

from __future__ import annotations

import re

from rulekit.checks.models import Check, Issue
from rulekit.documents.models import RULE_SUFFIX

_KEBAB_RE = re.compile(r"[a-z][a-z0-9-]*[a-z0-9]|[a-z][a-z0-9]*")


def _check_name_case(document, config):
    if not _KEBAB_RE.fullmatch(document.stem):
        yield Issue(f"File name should use kebab-case: {document.stem}")


def _check_extension(document, config):
    if not document.filename.endswith(RULE_SUFFIX):
        yield Issue(f"Rule files should use {RULE_SUFFIX} extension")


FILE_NAME_CASE = Check(
    id="FILE_NAME_CASE",
    name="Kebab-case File Name",
    description="Rule file names use lowercase words joined by hyphens.",
    category="naming",
    severity="warning",
    evaluate=_check_name_case,
)

FILE_EXTENSION = Check(
    id="FILE_EXTENSION",
    name="Rule File Extension",
    description="Rule files must carry the .mdc extension the editor loads.",
    category="naming",
    severity="error",
    evaluate=_check_extension,
)

ALL_NAMING_CHECKS = [FILE_NAME_CASE, FILE_EXTENSION]
