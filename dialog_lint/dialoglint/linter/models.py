"""Lint data models."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field

PathSegment = str | int


class NodeKind(str, Enum):
    """Shape of a YAML construct."""

    map = "map"
    sequence = "sequence"
    scalar = "scalar"


class Severity(str, Enum):
    """Severity level for findings."""

    error = "error"
    warning = "warning"


class FindingCategory(str, Enum):
    rule_violation = "rule_violation"
    internal_rule_error = "internal_rule_error"


class DuplicateKey(BaseModel):
    """A key repeated inside one map; the later value won."""

    model_config = ConfigDict(frozen=True)

    key: str
    line: int
    column: int


class ConfigNode(BaseModel):
    """One node of a parsed dialog document.

    ``path`` holds the raw keys and indices from the root. ``location`` is
    the same walk with sequence items (and the root) named by their ``id``
    when they carry one, which is how dialog authors refer to actions.
    """

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    path: tuple[PathSegment, ...] = ()
    location: tuple[PathSegment, ...] = ()
    key: PathSegment | None = None
    children: tuple[ConfigNode, ...] = ()
    value: str | None = None
    tag: str | None = None
    line: int = 1
    column: int = 1
    duplicate_keys: tuple[DuplicateKey, ...] = ()

    @property
    def is_map(self) -> bool:
        return self.kind is NodeKind.map

    @property
    def is_sequence(self) -> bool:
        return self.kind is NodeKind.sequence

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.scalar

    def keys(self) -> list[str]:
        """Map keys in document order (empty for non-maps)."""
        if not self.is_map:
            return []
        return [str(child.key) for child in self.children]

    def get(self, key: str) -> ConfigNode | None:
        if not self.is_map:
            return None
        for child in self.children:
            if child.key == key:
                return child
        return None

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def scalar(self, key: str) -> str | None:
        """Return the text of a scalar child, or None if absent or not a scalar."""
        child = self.get(key)
        if child is None or not child.is_scalar:
            return None
        return child.value

    def walk(self) -> Iterator[ConfigNode]:
        """Yield this node and its descendants pre-order, in document order."""
        stack: list[ConfigNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class Finding(BaseModel):
    """A single lint finding."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    severity: Severity
    path: tuple[PathSegment, ...] = ()
    message: str
    category: FindingCategory = FindingCategory.rule_violation
    line: int | None = None
    column: int | None = None

    @property
    def is_internal(self) -> bool:
        return self.category is FindingCategory.internal_rule_error


class Rule(BaseModel):
    """A named, stateless check over one node shape."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    description: str
    severity: Severity
    applies_to: Callable[[ConfigNode], bool]
    check: Callable[[ConfigNode], list[Finding]]


class ValidationResult(BaseModel):
    """Aggregated result of one lint run."""

    model_config = ConfigDict(frozen=True)

    findings: tuple[Finding, ...] = Field(default_factory=tuple)
    error_count: int = 0
    warning_count: int = 0
    profile: str = "core"

    @property
    def passed(self) -> bool:
        return self.error_count == 0


def format_path(path: tuple[PathSegment, ...]) -> str:
    """Render a location as ``a.b[0]``; the empty location is ``<root>``."""
    if not path:
        return "<root>"
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        elif out:
            out += f".{segment}"
        else:
            out = str(segment)
    return out
