"""Rule engine: walks a ConfigNode tree and applies every matching rule."""

from __future__ import annotations

import logging

from dialoglint.linter.catalog import RuleCatalog
from dialoglint.linter.models import (
    ConfigNode,
    Finding,
    FindingCategory,
    Rule,
    Severity,
)

logger = logging.getLogger(__name__)


class RuleEngine:
    """Applies a rule catalog to a document tree.

    Nodes are visited once each, pre-order, in document order. For every
    node the rules are tried in catalog order. A rule that raises yields a
    single internal finding and the walk continues.
    """

    def __init__(self, catalog: RuleCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog

    def run(self, root: ConfigNode) -> list[Finding]:
        findings: list[Finding] = []
        visited = 0
        for node in root.walk():
            visited += 1
            for rule in self._catalog:
                findings.extend(self._apply(rule, node))

        logger.info(
            "Rule engine produced %d findings for %d nodes (%d rules)",
            len(findings),
            visited,
            len(self._catalog),
        )
        return findings

    def _apply(self, rule: Rule, node: ConfigNode) -> list[Finding]:
        try:
            if not rule.applies_to(node):
                return []
            return list(rule.check(node))
        except Exception as e:
            logger.exception("Rule '%s' failed on node at line %d", rule.id, node.line)
            return [
                Finding(
                    rule_id=rule.id,
                    severity=Severity.error,
                    category=FindingCategory.internal_rule_error,
                    path=node.location,
                    message=f"[internal] rule '{rule.id}' failed: {type(e).__name__}: {e}",
                    line=node.line,
                    column=node.column,
                )
            ]
