"""Tests for option loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dialoglint.linter.catalog import ConventionProfile
from dialoglint.options import LintOptions, load_options


class TestLoadOptions:
    def test_defaults(self) -> None:
        options = load_options()
        assert options.profile == ConventionProfile.core
        assert options.disabled_rules == []

    def test_env_fallback(self, monkeypatch) -> None:
        monkeypatch.setenv("DIALOGLINT_PROFILE", "init-prefix")
        monkeypatch.setenv("DIALOGLINT_DISABLED_RULES", "question-variable-scope, action-requires-kind")
        options = load_options()
        assert options.profile == ConventionProfile.init_prefix
        assert options.disabled_rules == ["question-variable-scope", "action-requires-kind"]

    def test_options_file_wins(self, monkeypatch, tmp_path: Path) -> None:
        opts = tmp_path / "options.json"
        opts.write_text(json.dumps({"profile": "plain-variable", "disabled_rules": ["duplicate-key"]}))
        monkeypatch.setenv("DIALOGLINT_OPTIONS_PATH", str(opts))
        monkeypatch.setenv("DIALOGLINT_PROFILE", "init-prefix")
        options = load_options()
        assert options.profile == ConventionProfile.plain_variable
        assert "duplicate-key" not in options.catalog()

    def test_invalid_profile(self, monkeypatch) -> None:
        monkeypatch.setenv("DIALOGLINT_PROFILE", "strict")
        with pytest.raises(ValueError):
            load_options()

    def test_catalog_rejects_unknown_rule(self) -> None:
        with pytest.raises(ValueError):
            LintOptions(disabled_rules=["nope"]).catalog()
