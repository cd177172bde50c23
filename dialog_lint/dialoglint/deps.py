"""Shared FastAPI dependencies."""

from __future__ import annotations

from dialoglint.linter.catalog import RuleCatalog
from dialoglint.options import LintOptions

_catalog: RuleCatalog | None = None
_options: LintOptions | None = None


def get_rule_catalog() -> RuleCatalog:
    """FastAPI dependency: return the active RuleCatalog."""
    assert _catalog is not None, "RuleCatalog not initialised"
    return _catalog


def get_options() -> LintOptions:
    """FastAPI dependency: return the active LintOptions."""
    assert _options is not None, "LintOptions not initialised"
    return _options
