"""Tests for config loading, validation, and env var overrides."""

import os
from pathlib import Path

import pytest

from rulekit.config.loader import ConfigError, find_config_file, load_config
from rulekit.config.schema import DEFAULT_CATEGORY_LABELS, RulekitConfig, severity_at_or_above


class TestSeverityComparison:
    def test_at_or_above(self):
        assert severity_at_or_above("error", "error") is True
        assert severity_at_or_above("error", "warning") is True
        assert severity_at_or_above("warning", "warning") is True
        assert severity_at_or_above("warning", "error") is False


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.rules.dir == ".cursor/rules"
        assert cfg.validate.fail_on == "error"
        assert cfg.validate.max_line_length == 120
        assert cfg.validate.required_fields == ["description"]
        assert cfg.output.format == "terminal"
        assert cfg.cli.tool_name == "copy-cursor-rules"
        assert cfg.install.labels == DEFAULT_CATEGORY_LABELS
        assert cfg.strict is False

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text(
            'version = "1.0"\n'
            "[validate]\n"
            'fail_on = "warning"\n'
            "max_line_length = 100\n"
            "[ignore]\n"
            'files = ["drafts/*"]\n'
            "[cli]\n"
            'tool_name = "sync-rules"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.strict is True
        assert cfg.validate.max_line_length == 100
        assert cfg.ignore.files == ["drafts/*"]
        assert cfg.cli.tool_name == "sync-rules"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text("[validate]\nunknown_key = 1\n")
        cfg = load_config(tmp_path)
        assert cfg.validate.fail_on == "error"

    def test_labels_extend_defaults(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text(
            '[install.labels]\nsecurity = "🔒 Security Rules"\n', encoding="utf-8"
        )
        cfg = load_config(tmp_path)
        assert cfg.install.labels["security"] == "🔒 Security Rules"
        assert cfg.install.labels["tools"] == "🛠️ Tool Management"
        assert list(cfg.install.labels)[-1] == "security"

    def test_invalid_fail_on(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text('[validate]\nfail_on = "critical"\n')
        with pytest.raises(ConfigError, match="fail_on"):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text('validate = "strict"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(tmp_path)

    def test_malformed_toml(self, tmp_path: Path):
        (tmp_path / ".rulekit.toml").write_text("[validate\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(tmp_path)

    def test_override_path(self, tmp_path: Path):
        other = tmp_path / "custom.toml"
        other.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, str(other))
        assert cfg.output.format == "json"

    def test_override_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            find_config_file(tmp_path, str(tmp_path / "nope.toml"))


class TestEnvOverrides:
    def test_strict(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_STRICT", "1")
        assert load_config(tmp_path).strict is True

    def test_fail_on(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_FAIL_ON", "warning")
        assert load_config(tmp_path).validate.fail_on == "warning"

    def test_invalid_fail_on_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_FAIL_ON", "loud")
        assert load_config(tmp_path).validate.fail_on == "error"

    def test_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_FORMAT", "sarif")
        assert load_config(tmp_path).output.format == "sarif"

    def test_disable_checks(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_DISABLE_CHECKS", "TYPO, LONG_LINE,")
        assert load_config(tmp_path).checks.disable == ["TYPO", "LONG_LINE"]

    def test_ignore_files(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_IGNORE_FILES", os.pathsep.join(["drafts/*", "wip-*.mdc"]))
        assert load_config(tmp_path).ignore.files == ["drafts/*", "wip-*.mdc"]

    def test_max_line_length(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_MAX_LINE_LENGTH", "80")
        assert load_config(tmp_path).validate.max_line_length == 80

    def test_bad_max_line_length_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_MAX_LINE_LENGTH", "wide")
        assert load_config(tmp_path).validate.max_line_length == 120

    def test_env_does_not_leak_into_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("RULEKIT_DISABLE_CHECKS", "TYPO")
        load_config(tmp_path)
        assert RulekitConfig().checks.disable == []
