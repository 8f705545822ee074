"""Shared test fixtures: sample rule documents and rules trees."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from rulekit.documents.frontmatter import split_frontmatter
from rulekit.documents.models import RuleDocument

VALID_RULE = textwrap.dedent("""\
    ---
    description: Prefer small focused functions
    globs: "*.py"
    alwaysApply: false
    ---
    # Small Functions 🎯

    ## Motivation

    Short functions are easier to test.

    ## Examples

    ### ✅ Good

    ```python
    def add(a, b):
        return a + b
    ```
""")

NO_FRONTMATTER_RULE = textwrap.dedent("""\
    # Tool Versions 🛠️

    ## Motivation

    Pinned tools keep builds reproducible.

    ## Examples

    Pin every tool in the manifest.
""")

WARN_ONLY_RULE = textwrap.dedent("""\
    ---
    description: Missing the globs field
    alwaysApply: false
    ---
    # Warn Only 🌍

    ## Motivation

    Only a recommended field is missing.

    ## Examples

    ### ❌ Bad

    Leaving globs out.
""")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep CI detection and RULEKIT_* overrides out of every test."""
    for name in (
        "CI",
        "GITHUB_ACTIONS",
        "RULEKIT_FAIL_ON",
        "RULEKIT_STRICT",
        "RULEKIT_FORMAT",
        "RULEKIT_DISABLE_CHECKS",
        "RULEKIT_IGNORE_FILES",
        "RULEKIT_MAX_LINE_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


def make_doc(text: str, name: str = "sample-rule.mdc") -> RuleDocument:
    """Build a RuleDocument from raw text without touching the filesystem."""
    frontmatter, body, body_start = split_frontmatter(text)
    return RuleDocument(
        path=Path(name),
        relpath=name,
        text=text,
        frontmatter=frontmatter,
        body=body,
        body_start=body_start,
    )


@pytest.fixture
def valid_doc() -> RuleDocument:
    return make_doc(VALID_RULE, "small-functions.mdc")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project whose .cursor/rules holds one valid, one broken, one warning rule."""
    root = tmp_path / "project"
    rules = root / ".cursor" / "rules"
    (rules / "categories" / "ai-behavior").mkdir(parents=True)
    (rules / "categories" / "tools").mkdir(parents=True)
    (rules / "categories" / "project-standards").mkdir(parents=True)

    (rules / "README.md").write_text("# Rules\n", encoding="utf-8")
    (rules / "categories" / "ai-behavior" / "small-functions.mdc").write_text(
        VALID_RULE, encoding="utf-8"
    )
    (rules / "categories" / "tools" / "no-frontmatter.mdc").write_text(
        NO_FRONTMATTER_RULE, encoding="utf-8"
    )
    (rules / "categories" / "project-standards" / "warn-only.mdc").write_text(
        WARN_ONLY_RULE, encoding="utf-8"
    )
    return root


@pytest.fixture
def rules_dir(project: Path) -> Path:
    return project / ".cursor" / "rules"
