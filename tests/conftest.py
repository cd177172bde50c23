"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add dialog_lint/ to Python path so `from dialoglint.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "dialog_lint"))

import pytest

os.environ["DIALOGLINT_DEV_MODE"] = "true"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def valid_topic_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "valid_topic.yaml"


@pytest.fixture
def broken_topic_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "broken_topic.yaml"


@pytest.fixture
def unterminated_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "unterminated.yaml"


@pytest.fixture(autouse=True)
def isolated_options(monkeypatch, tmp_path: Path) -> None:
    """Keep host options files and env vars out of the tests."""
    monkeypatch.setenv("DIALOGLINT_OPTIONS_PATH", str(tmp_path / "missing-options.json"))
    monkeypatch.delenv("DIALOGLINT_PROFILE", raising=False)
    monkeypatch.delenv("DIALOGLINT_DISABLED_RULES", raising=False)
