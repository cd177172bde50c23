"""Lint pipeline: load, walk, report."""

from __future__ import annotations

from dialoglint.linter.catalog import RuleCatalog, build_catalog
from dialoglint.linter.engine import RuleEngine
from dialoglint.linter.loader import load_document
from dialoglint.linter.models import ValidationResult
from dialoglint.linter.report import build_result


def validate(yaml_str: str, catalog: RuleCatalog | None = None) -> ValidationResult:
    """Run the full lint pipeline on one dialog document.

    Raises ParseError if the text cannot be loaded; otherwise every finding
    of the run is in the returned result.
    """
    if catalog is None:
        catalog = build_catalog()
    root = load_document(yaml_str)
    findings = RuleEngine(catalog).run(root)
    return build_result(findings, profile=catalog.profile)
