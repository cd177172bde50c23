"""Deterministic dialog rules: one predicate and one check per documented convention."""

from __future__ import annotations

from typing import Callable

from dialoglint.linter.models import ConfigNode, Finding, Severity

QUESTION_REQUIRED_KEYS = ("variable", "entity", "prompt")
VARIABLE_SCOPES = ("Topic.", "Global.", "System.", "Bot.")
INIT_PREFIX = "init:"
ACTION_LIST_KEYS = ("actions", "defaultActions")


def _finding(
    rule_id: str,
    severity: Severity,
    node: ConfigNode,
    message: str,
    line: int | None = None,
    column: int | None = None,
) -> Finding:
    return Finding(
        rule_id=rule_id,
        severity=severity,
        path=node.location,
        message=message,
        line=node.line if line is None else line,
        column=node.column if column is None else column,
    )


def _is_kind(node: ConfigNode, kind: str) -> bool:
    return node.is_map and node.scalar("kind") == kind


def _is_item_of(node: ConfigNode, parent_keys: tuple[str, ...]) -> bool:
    """True if *node* is an item of a sequence stored under one of *parent_keys*."""
    if not isinstance(node.key, int) or len(node.path) < 2:
        return False
    return node.path[-2] in parent_keys


def _is_missing(node: ConfigNode, key: str) -> bool:
    child = node.get(key)
    if child is None:
        return True
    return child.is_scalar and child.tag == "null"


# -- duplicate-key --

def has_duplicate_keys(node: ConfigNode) -> bool:
    return node.is_map and bool(node.duplicate_keys)


def check_duplicate_keys(node: ConfigNode) -> list[Finding]:
    """Report each repeated key; the loader kept the last value."""
    return [
        _finding(
            "duplicate-key",
            Severity.error,
            node,
            f"Key '{dup.key}' is defined more than once; only the last value is used.",
            line=dup.line,
            column=dup.column,
        )
        for dup in node.duplicate_keys
    ]


# -- entity-lowercase --

def _miscased_entity_keys(node: ConfigNode) -> list[str]:
    return [k for k in node.keys() if k.lower() == "entity" and k != "entity"]


def has_miscased_entity_key(node: ConfigNode) -> bool:
    return node.is_map and bool(_miscased_entity_keys(node))


def check_entity_lowercase(node: ConfigNode) -> list[Finding]:
    findings: list[Finding] = []
    for key in _miscased_entity_keys(node):
        child = node.get(key)
        findings.append(
            _finding(
                "entity-lowercase",
                Severity.error,
                node,
                f"Key '{key}' must be written in lowercase as 'entity'.",
                line=child.line if child else None,
                column=child.column if child else None,
            )
        )
    return findings


# -- question-required-fields --

def is_question(node: ConfigNode) -> bool:
    return _is_kind(node, "Question")


def make_question_required_fields(profile: str) -> Callable[[ConfigNode], list[Finding]]:
    """Build the Question check for a convention profile.

    ``init-prefix`` requires the ``init:`` variable prefix and an
    ``interruptionPolicy`` block; ``plain-variable`` rejects both; ``core``
    checks neither.
    """
    required = QUESTION_REQUIRED_KEYS
    if profile == "init-prefix":
        required = required + ("interruptionPolicy",)

    def check_question_required_fields(node: ConfigNode) -> list[Finding]:
        findings: list[Finding] = []
        missing = [key for key in required if _is_missing(node, key)]
        if missing:
            keys = ", ".join(f"'{k}'" for k in missing)
            findings.append(
                _finding(
                    "question-required-fields",
                    Severity.error,
                    node,
                    f"Question is missing required key(s): {keys}.",
                )
            )

        variable = node.scalar("variable")
        if profile == "init-prefix" and variable and not variable.startswith(INIT_PREFIX):
            findings.append(
                _finding(
                    "question-required-fields",
                    Severity.error,
                    node.get("variable") or node,
                    f"Question variable '{variable}' must use the '{INIT_PREFIX}' prefix "
                    f"(e.g. '{INIT_PREFIX}{variable}').",
                )
            )
        elif profile == "plain-variable":
            if variable and variable.startswith(INIT_PREFIX):
                findings.append(
                    _finding(
                        "question-required-fields",
                        Severity.error,
                        node.get("variable") or node,
                        f"The '{INIT_PREFIX}' prefix is not supported; use "
                        f"'{variable[len(INIT_PREFIX):]}'.",
                    )
                )
            policy = node.get("interruptionPolicy")
            if policy is not None:
                findings.append(
                    _finding(
                        "question-required-fields",
                        Severity.error,
                        policy,
                        "'interruptionPolicy' is not supported on Question and must be removed.",
                    )
                )
        return findings

    return check_question_required_fields


# -- question-variable-scope --

def is_question_with_variable(node: ConfigNode) -> bool:
    return is_question(node) and bool(node.scalar("variable"))


def check_question_variable_scope(node: ConfigNode) -> list[Finding]:
    variable = node.scalar("variable") or ""
    name = variable[len(INIT_PREFIX):] if variable.startswith(INIT_PREFIX) else variable
    if name.startswith(VARIABLE_SCOPES):
        return []
    scopes = ", ".join(s.rstrip(".") for s in VARIABLE_SCOPES)
    return [
        _finding(
            "question-variable-scope",
            Severity.warning,
            node.get("variable") or node,
            f"Variable '{name}' has no scope; expected one of {scopes} (e.g. 'Topic.{name}').",
        )
    ]


# -- condition-requires-id / condition-formula-prefix --

def is_condition_item(node: ConfigNode) -> bool:
    return _is_item_of(node, ("conditions",))


def check_condition_requires_id(node: ConfigNode) -> list[Finding]:
    if not node.is_map:
        return [
            _finding(
                "condition-requires-id",
                Severity.error,
                node,
                f"Condition must be a map with an 'id' key, found {node.kind.value}.",
            )
        ]
    if not _is_missing(node, "id"):
        return []
    return [
        _finding(
            "condition-requires-id",
            Severity.error,
            node,
            "Condition is missing required key 'id'.",
        )
    ]


def is_condition_with_formula(node: ConfigNode) -> bool:
    return is_condition_item(node) and bool(node.scalar("condition"))


def check_condition_formula_prefix(node: ConfigNode) -> list[Finding]:
    formula = node.scalar("condition") or ""
    if formula.lstrip().startswith("="):
        return []
    return [
        _finding(
            "condition-formula-prefix",
            Severity.warning,
            node.get("condition") or node,
            f"Condition '{formula}' is not a formula; prefix it with '=' (e.g. '={formula}').",
        )
    ]


# -- conditiongroup-defaultActions-recommended --

def is_condition_group(node: ConfigNode) -> bool:
    return _is_kind(node, "ConditionGroup")


def check_condition_group_default_actions(node: ConfigNode) -> list[Finding]:
    if not _is_missing(node, "defaultActions"):
        return []
    return [
        _finding(
            "conditiongroup-defaultActions-recommended",
            Severity.warning,
            node,
            "ConditionGroup has no 'defaultActions'; add a fallback for when no condition matches.",
        )
    ]


# -- action-requires-kind --

def is_action_item(node: ConfigNode) -> bool:
    return _is_item_of(node, ACTION_LIST_KEYS)


def check_action_requires_kind(node: ConfigNode) -> list[Finding]:
    if not node.is_map:
        return [
            _finding(
                "action-requires-kind",
                Severity.error,
                node,
                f"Action must be a map with a 'kind' key, found {node.kind.value}.",
            )
        ]
    if node.scalar("kind"):
        return []
    return [
        _finding(
            "action-requires-kind",
            Severity.error,
            node,
            "Action is missing required key 'kind'.",
        )
    ]
