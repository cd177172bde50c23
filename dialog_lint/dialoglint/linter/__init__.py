"""Static lint pipeline for dialog YAML."""

from dialoglint.linter.catalog import ConventionProfile, RuleCatalog, build_catalog
from dialoglint.linter.errors import ParseError, ParseErrorKind
from dialoglint.linter.models import ConfigNode, Finding, Rule, Severity, ValidationResult
from dialoglint.linter.pipeline import validate

__all__ = [
    "ConfigNode",
    "ConventionProfile",
    "Finding",
    "ParseError",
    "ParseErrorKind",
    "Rule",
    "RuleCatalog",
    "Severity",
    "ValidationResult",
    "build_catalog",
    "validate",
]
