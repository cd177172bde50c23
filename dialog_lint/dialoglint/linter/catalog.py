"""Rule catalog and convention profiles."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

from dialoglint.linter import dialog_rules as r
from dialoglint.linter.models import Rule, Severity


class ConventionProfile(str, Enum):
    """Which variant of the authoring guide's Question conventions is enforced.

    The guide variants disagree on the ``init:`` variable prefix and the
    ``interruptionPolicy`` block, so neither is assumed by default.
    """

    core = "core"
    init_prefix = "init-prefix"
    plain_variable = "plain-variable"


class RuleCatalog:
    """An ordered, immutable set of rules with unique ids."""

    def __init__(self, rules: Iterable[Rule], profile: str = ConventionProfile.core.value) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        self.profile = profile
        seen: set[str] = set()
        for rule in self._rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id '{rule.id}' in catalog")
            seen.add(rule.id)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.id == rule_id for rule in self._rules)

    def ids(self) -> list[str]:
        return [rule.id for rule in self._rules]

    def get(self, rule_id: str) -> Rule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(rule_id)

    def without(self, rule_ids: Iterable[str]) -> RuleCatalog:
        """Return a new catalog with *rule_ids* removed; unknown ids raise ValueError."""
        drop = set(rule_ids)
        unknown = drop - set(self.ids())
        if unknown:
            raise ValueError(f"Unknown rule id(s): {', '.join(sorted(unknown))}")
        return RuleCatalog(
            (rule for rule in self._rules if rule.id not in drop),
            profile=self.profile,
        )


def default_rules(profile: ConventionProfile = ConventionProfile.core) -> list[Rule]:
    """The documented rules, in catalog order, for *profile*."""
    question_desc = "Question needs 'variable', 'entity' and 'prompt'"
    if profile is ConventionProfile.init_prefix:
        question_desc += ", an 'init:' variable prefix and an 'interruptionPolicy' block"
    elif profile is ConventionProfile.plain_variable:
        question_desc += "; 'init:' prefixes and 'interruptionPolicy' are unsupported"

    return [
        Rule(
            id="duplicate-key",
            description="A key may appear only once per map",
            severity=Severity.error,
            applies_to=r.has_duplicate_keys,
            check=r.check_duplicate_keys,
        ),
        Rule(
            id="entity-lowercase",
            description="The 'entity' key must be lowercase",
            severity=Severity.error,
            applies_to=r.has_miscased_entity_key,
            check=r.check_entity_lowercase,
        ),
        Rule(
            id="question-required-fields",
            description=question_desc,
            severity=Severity.error,
            applies_to=r.is_question,
            check=r.make_question_required_fields(profile.value),
        ),
        Rule(
            id="question-variable-scope",
            description="Question variables should be scoped (Topic., Global., System., Bot.)",
            severity=Severity.warning,
            applies_to=r.is_question_with_variable,
            check=r.check_question_variable_scope,
        ),
        Rule(
            id="condition-requires-id",
            description="Every item under 'conditions' needs an 'id'",
            severity=Severity.error,
            applies_to=r.is_condition_item,
            check=r.check_condition_requires_id,
        ),
        Rule(
            id="condition-formula-prefix",
            description="Condition expressions should be formulas starting with '='",
            severity=Severity.warning,
            applies_to=r.is_condition_with_formula,
            check=r.check_condition_formula_prefix,
        ),
        Rule(
            id="conditiongroup-defaultActions-recommended",
            description="ConditionGroup should define 'defaultActions'",
            severity=Severity.warning,
            applies_to=r.is_condition_group,
            check=r.check_condition_group_default_actions,
        ),
        Rule(
            id="action-requires-kind",
            description="Every item under 'actions' or 'defaultActions' needs a 'kind'",
            severity=Severity.error,
            applies_to=r.is_action_item,
            check=r.check_action_requires_kind,
        ),
    ]


def build_catalog(
    profile: ConventionProfile | str = ConventionProfile.core,
    disabled_rules: Iterable[str] = (),
) -> RuleCatalog:
    """Build the catalog for a profile, minus any disabled rules.

    Raises ValueError for an unknown profile or rule id.
    """
    try:
        profile = ConventionProfile(profile)
    except ValueError:
        valid = ", ".join(p.value for p in ConventionProfile)
        raise ValueError(f"Unknown profile '{profile}'; expected one of: {valid}") from None

    catalog = RuleCatalog(default_rules(profile), profile=profile.value)
    disabled = list(disabled_rules)
    if disabled:
        catalog = catalog.without(disabled)
    return catalog
