"""Tests for the validation engine and finding aggregation."""

from pathlib import Path

import pytest

from rulekit.checks.models import Check
from rulekit.checks.registry import CheckRegistry, build_registry
from rulekit.config.schema import IgnoreConfig, RulekitConfig, ValidateConfig
from rulekit.documents.discovery import iter_rule_files
from rulekit.findings.aggregator import deduplicate
from rulekit.findings.models import RawFinding
from rulekit.validator.engine import UNREADABLE_CHECK_ID, ValidationError, validate


def _raw(check_id="C", severity="warning", file="a.mdc", line_no=1, message="m"):
    return RawFinding(
        check_id=check_id,
        check_name=check_id,
        severity=severity,
        category="quality",
        file=file,
        line_no=line_no,
        message=message,
    )


def _validate(rules_dir: Path, config=None, files=None):
    config = config or RulekitConfig()
    registry = build_registry(config, rules_dir.parent.parent)
    files = files if files is not None else iter_rule_files(rules_dir)
    return validate(files, config, registry, rules_dir)


class TestDeduplicate:
    def test_repeats_dropped(self):
        findings = deduplicate([_raw(), _raw(), _raw(line_no=2)], "error")
        assert [f.id for f in findings] == ["FINDING-001", "FINDING-002"]

    def test_severity_gate(self):
        findings = deduplicate(
            [_raw(severity="warning"), _raw(check_id="E", severity="error")], "error"
        )
        assert [f.is_blocking for f in findings] == [False, True]

    def test_warning_gate_blocks_everything(self):
        findings = deduplicate([_raw(severity="warning")], "warning")
        assert findings[0].is_blocking is True


class TestValidate:
    def test_sample_project(self, rules_dir: Path):
        result = _validate(rules_dir)
        assert result.files_checked == 3
        assert result.errors == 1
        assert result.warnings == 1
        assert result.blocked is True
        assert result.strict is False

        error = next(f for f in result.findings if f.severity == "error")
        assert error.check_id == "FRONTMATTER_MISSING"
        assert error.file == "categories/tools/no-frontmatter.mdc"
        assert error.is_blocking is True

        warning = next(f for f in result.findings if f.severity == "warning")
        assert warning.check_id == "RECOMMENDED_FIELD"
        assert warning.file == "categories/project-standards/warn-only.mdc"
        assert warning.is_blocking is False

    def test_warnings_alone_do_not_block(self, rules_dir: Path):
        (rules_dir / "categories" / "tools" / "no-frontmatter.mdc").unlink()
        result = _validate(rules_dir)
        assert result.errors == 0
        assert result.warnings == 1
        assert result.blocked is False

    def test_strict_mode_blocks_on_warnings(self, rules_dir: Path):
        (rules_dir / "categories" / "tools" / "no-frontmatter.mdc").unlink()
        cfg = RulekitConfig(validate=ValidateConfig(fail_on="warning"))
        result = _validate(rules_dir, cfg)
        assert result.strict is True
        assert result.blocked is True
        assert len(result.blocking_findings) == 1

    def test_strict_mode_counts_all_blocking(self, rules_dir: Path):
        cfg = RulekitConfig(validate=ValidateConfig(fail_on="warning"))
        result = _validate(rules_dir, cfg)
        assert len(result.blocking_findings) == 2

    def test_ignore_globs(self, rules_dir: Path):
        cfg = RulekitConfig(ignore=IgnoreConfig(files=["categories/tools/*"]))
        result = _validate(rules_dir, cfg)
        assert result.errors == 0
        assert result.files_checked == 2
        assert result.skipped_files == ["categories/tools/no-frontmatter.mdc (ignored)"]

    def test_ignore_by_file_name(self, rules_dir: Path):
        cfg = RulekitConfig(ignore=IgnoreConfig(files=["warn-*.mdc"]))
        result = _validate(rules_dir, cfg)
        assert result.warnings == 0
        assert len(result.skipped_files) == 1

    def test_missing_file_reported(self, rules_dir: Path):
        missing = rules_dir / "categories" / "tools" / "gone.mdc"
        result = _validate(rules_dir, files=[missing])
        assert result.files_checked == 0
        assert result.findings[0].check_id == UNREADABLE_CHECK_ID
        assert result.findings[0].message == "File not found or not readable"
        assert result.blocked is True

    def test_duplicate_paths_checked_once(self, rules_dir: Path):
        path = rules_dir / "categories" / "ai-behavior" / "small-functions.mdc"
        result = _validate(rules_dir, files=[path, path])
        assert result.checked_files == ["categories/ai-behavior/small-functions.mdc"]
        assert result.findings == []

    def test_disabled_check_not_run(self, rules_dir: Path):
        cfg = RulekitConfig()
        cfg.checks.disable = ["FRONTMATTER_MISSING"]
        result = _validate(rules_dir, cfg)
        assert result.errors == 0

    def test_findings_for(self, rules_dir: Path):
        result = _validate(rules_dir)
        assert result.findings_for("categories/ai-behavior/small-functions.mdc") == []
        assert len(result.findings_for("categories/tools/no-frontmatter.mdc")) == 1

    def test_check_crash_wrapped(self, rules_dir: Path):
        def explode(document, config):
            raise RuntimeError("boom")

        registry = CheckRegistry()
        registry.register(
            Check(id="BOOM", name="Boom", description="", category="quality",
                  severity="error", evaluate=explode)
        )
        with pytest.raises(ValidationError, match="Check BOOM failed on .*: boom"):
            validate(iter_rule_files(rules_dir), RulekitConfig(), registry, rules_dir)
