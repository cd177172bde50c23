"""Document loader: YAML text to a ConfigNode tree using ruamel.yaml."""

from __future__ import annotations

import logging
from io import StringIO

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from dialoglint.linter.errors import ParseError, ParseErrorKind
from dialoglint.linter.models import ConfigNode, DuplicateKey, NodeKind, PathSegment

logger = logging.getLogger(__name__)

_CORE_TAG_PREFIX = "tag:yaml.org,2002:"
MAX_ALIAS_NODES = 10_000


def load_document(yaml_str: str, max_alias_nodes: int = MAX_ALIAS_NODES) -> ConfigNode:
    """Parse YAML text into an ordered ConfigNode tree.

    Raises ParseError for empty or malformed input. Map key order and
    sequence order follow the source text; aliases are expanded into
    independent subtrees, up to *max_alias_nodes* re-expanded nodes per
    document.
    """
    if not yaml_str or not yaml_str.strip():
        raise ParseError("Empty YAML document", 1, 1, ParseErrorKind.empty_document)

    yaml = YAML()
    try:
        root = yaml.compose(StringIO(yaml_str))
    except YAMLError as e:
        line, column = _error_position(e)
        raise ParseError(_error_message(e), line, column) from e

    if root is None:
        raise ParseError("YAML document has no content", 1, 1, ParseErrorKind.empty_document)

    state = _ExpansionState(max_alias_nodes)
    tree = _build(root, key=None, path=(), parent_location=(), named=True, state=state)
    logger.debug("Loaded document rooted at line %d", tree.line)
    return tree


def _error_position(e: YAMLError) -> tuple[int, int]:
    """Return the 1-based (line, column) of a ruamel error, or (1, 1) if unknown."""
    for attr in ("problem_mark", "context_mark"):
        mark = getattr(e, attr, None)
        if mark is not None:
            return mark.line + 1, mark.column + 1
    return 1, 1


def _error_message(e: YAMLError) -> str:
    problem = getattr(e, "problem", None)
    context = getattr(e, "context", None)
    if problem and context:
        return f"{context}: {problem}"
    if problem:
        return str(problem)
    return str(e).strip().splitlines()[0] if str(e).strip() else type(e).__name__


def _short_tag(node: Node) -> str:
    tag = str(node.tag)
    if tag.startswith(_CORE_TAG_PREFIX):
        return tag[len(_CORE_TAG_PREFIX):]
    return tag


def _key_text(node: Node) -> str:
    """Render a map key node as text; complex keys use flow style."""
    if isinstance(node, ScalarNode):
        return node.value
    if isinstance(node, SequenceNode):
        return "[" + ", ".join(_key_text(item) for item in node.value) + "]"
    if isinstance(node, MappingNode):
        pairs = (f"{_key_text(k)}: {_key_text(v)}" for k, v in node.value)
        return "{" + ", ".join(pairs) + "}"
    return str(node.value)


def _dedupe_pairs(
    node: MappingNode,
) -> tuple[list[tuple[str, Node]], list[DuplicateKey]]:
    """Collapse repeated keys: the later value wins and takes the later position."""
    pairs: list[tuple[str, Node]] = []
    duplicates: list[DuplicateKey] = []
    for key_node, value_node in node.value:
        key = _key_text(key_node)
        for i, (existing, _) in enumerate(pairs):
            if existing == key:
                del pairs[i]
                duplicates.append(
                    DuplicateKey(
                        key=key,
                        line=key_node.start_mark.line + 1,
                        column=key_node.start_mark.column + 1,
                    )
                )
                break
        pairs.append((key, value_node))
    return pairs, duplicates


class _ExpansionState:
    """Bookkeeping for one load: the alias chain in progress and the re-expansion budget."""

    def __init__(self, max_alias_nodes: int) -> None:
        self.max_alias_nodes = max_alias_nodes
        self.active: set[int] = set()
        self.seen: set[int] = set()
        self.alias_depth = 0
        self.alias_nodes = 0


def _build(
    node: Node,
    key: PathSegment | None,
    path: tuple[PathSegment, ...],
    parent_location: tuple[PathSegment, ...],
    named: bool,
    state: _ExpansionState,
) -> ConfigNode:
    """Recursively convert a composed ruamel node.

    ``named`` is true for the root and sequence items, the positions where
    an ``id`` replaces the raw segment in the location. Nodes reached a
    second time come from an alias; every node built under such a
    re-expansion counts against ``max_alias_nodes``.
    """
    line = node.start_mark.line + 1
    column = node.start_mark.column + 1

    if id(node) in state.active:
        raise ParseError(
            "Recursive alias cannot be expanded",
            line,
            column,
            ParseErrorKind.recursive_alias,
        )

    reused = id(node) in state.seen
    state.seen.add(id(node))
    if reused:
        state.alias_depth += 1
    try:
        if state.alias_depth:
            state.alias_nodes += 1
            if state.alias_nodes > state.max_alias_nodes:
                raise ParseError(
                    f"Alias expansion exceeds {state.max_alias_nodes} nodes",
                    line,
                    column,
                    ParseErrorKind.alias_expansion_limit,
                )
        return _build_node(node, key, path, parent_location, named, state, line, column)
    finally:
        if reused:
            state.alias_depth -= 1


def _build_node(
    node: Node,
    key: PathSegment | None,
    path: tuple[PathSegment, ...],
    parent_location: tuple[PathSegment, ...],
    named: bool,
    state: _ExpansionState,
    line: int,
    column: int,
) -> ConfigNode:
    if isinstance(node, ScalarNode):
        return ConfigNode(
            kind=NodeKind.scalar,
            path=path,
            location=parent_location if key is None else parent_location + (key,),
            key=key,
            value=node.value,
            tag=_short_tag(node),
            line=line,
            column=column,
        )

    state.active.add(id(node))
    try:
        if isinstance(node, MappingNode):
            pairs, duplicates = _dedupe_pairs(node)
            node_id = None
            if named:
                for k, v in pairs:
                    if k == "id" and isinstance(v, ScalarNode) and v.value:
                        node_id = v.value
            if node_id is not None:
                location = parent_location + (node_id,)
            elif key is not None:
                location = parent_location + (key,)
            else:
                location = parent_location
            children = tuple(
                _build(v, k, path + (k,), location, named=False, state=state)
                for k, v in pairs
            )
            return ConfigNode(
                kind=NodeKind.map,
                path=path,
                location=location,
                key=key,
                children=children,
                tag=_short_tag(node),
                line=line,
                column=column,
                duplicate_keys=tuple(duplicates),
            )

        if isinstance(node, SequenceNode):
            location = parent_location if key is None else parent_location + (key,)
            children = tuple(
                _build(item, i, path + (i,), location, named=True, state=state)
                for i, item in enumerate(node.value)
            )
            return ConfigNode(
                kind=NodeKind.sequence,
                path=path,
                location=location,
                key=key,
                children=children,
                tag=_short_tag(node),
                line=line,
                column=column,
            )
    finally:
        state.active.discard(id(node))

    raise ParseError(f"Unsupported YAML node {type(node).__name__}", line, column)
