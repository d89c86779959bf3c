"""
Generic tree navigation and mutation for the DotConfig configuration system.

A configuration tree is made of plain Python values. Every node belongs to
one of a closed set of kinds:

============  ==========================
Kind          Python representation
============  ==========================
Null          ``None``
Boolean       ``bool``
Integer       ``int`` (but not ``bool``)
Float         ``float``
String        ``str``
Sequence      ``list``
Mapping       ``dict`` with ``str`` keys
============  ==========================

``get_node`` reads a node by dotted path and returns it by reference (no
copy). ``set_node`` assigns a value in place, materializing missing mappings
and sequences along the way. Mutation is not transactional: when a walk fails
part way through, containers created before the failure stay in the tree.

The tree has no locking. Callers sharing one tree between threads must guard
``set_node`` (and anything built on it) themselves.
"""

from enum import Enum
from typing import Any, List, Optional

from DotConfig.config.paths import (
    join_path,
    parse_integer,
    split_read_path,
    split_write_path,
)
from DotConfig.exceptions import (
    IndexOutOfRangeError,
    InvalidIndexError,
    InvalidTypeError,
    NoSuchKeyError,
)


class NodeKind(Enum):
    """The kinds of node a configuration tree can hold."""
    NULL = "Null"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"
    SEQUENCE = "Sequence"
    MAPPING = "Mapping"


def kind_of(node: Any) -> Optional[NodeKind]:
    """
    Classify a node.

    Args:
        node: Any value found in (or destined for) a configuration tree

    Returns:
        Optional[NodeKind]: The node's kind, or None for values outside the
        supported set (e.g. dates, sets, arbitrary objects).
    """
    # bool is checked before int since it is a subclass of it
    if node is None:
        return NodeKind.NULL
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, int):
        return NodeKind.INTEGER
    if isinstance(node, float):
        return NodeKind.FLOAT
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    if isinstance(node, dict):
        return NodeKind.MAPPING
    return None


def describe(node: Any) -> str:
    """Return a readable name for a node's kind, used in error messages."""
    kind = kind_of(node)
    return kind.value if kind is not None else type(node).__name__


def _invalid_type(parts: List[str], node: Any) -> InvalidTypeError:
    sub_path = join_path(parts)
    actual = describe(node)
    return InvalidTypeError(
        f"invalid type at {sub_path!r}: expected Sequence or Mapping; got {actual}",
        context={"path": sub_path, "actual": actual, "expected": "Sequence|Mapping"},
    )


def _parse_index(parts: List[str]) -> int:
    index = parse_integer(parts[-1])
    if index is None or index < 0:
        sub_path = join_path(parts)
        raise InvalidIndexError(
            f"invalid list index at {sub_path!r}",
            context={"path": sub_path},
        )
    return index


def get_node(root: Any, path: str) -> Any:
    """
    Resolve a dotted path against a tree.

    Args:
        root: The tree to read from
        path: Read path (bracket segments allowed), e.g. ``"servers.0.host"``

    Returns:
        Any: The node at ``path``, shared with the tree (not a copy).

    Raises:
        InvalidPathError: If the path is malformed.
        InvalidIndexError: If a sequence is addressed with a non-index segment.
        IndexOutOfRangeError: If a sequence index is past the end.
        NoSuchKeyError: If a mapping has no such key.
        InvalidTypeError: If the walk reaches a leaf while segments remain.

    Examples:
        >>> get_node({"a": {"b": [10, 20]}}, "a.b.1")
        20
    """
    parts = split_read_path(path)
    node = root

    for position in range(len(parts)):
        walked = parts[:position + 1]
        part = parts[position]

        if isinstance(node, list):
            index = _parse_index(walked)
            if index >= len(node):
                sub_path = join_path(walked)
                raise IndexOutOfRangeError(
                    f"index out of range at {sub_path!r}: list has only {len(node)} items",
                    context={"path": sub_path, "length": len(node)},
                )
            node = node[index]
        elif isinstance(node, dict):
            if part not in node:
                sub_path = join_path(walked)
                raise NoSuchKeyError(
                    f"nonexistent map key at {sub_path!r}",
                    context={"path": sub_path},
                )
            node = node[part]
        else:
            raise _invalid_type(walked, node)

    return node


def _new_container(next_part: str) -> Any:
    # The next segment decides what kind of container is materialized
    if parse_integer(next_part) is not None:
        return []
    return {}


def set_node(root: Any, path: str, value: Any) -> None:
    """
    Assign ``value`` at a dotted path, creating missing structure.

    Missing mapping keys are filled with a new sequence when the following
    segment is an integer and with a new mapping otherwise. Sequences are
    padded with ``None`` until the addressed index exists, and a ``None``
    element that must be walked through is replaced the same way.

    Args:
        root: The tree to modify in place (must be a list or dict unless
            ``path`` is empty)
        path: Write path; brackets have no special meaning here
        value: The value to store

    Raises:
        InvalidPathError: If the path is malformed.
        InvalidIndexError: If a sequence is addressed with a non-index segment.
        InvalidTypeError: If the walk reaches a leaf or null while segments remain.

    Examples:
        >>> tree = {}
        >>> set_node(tree, "a.2", "x")
        >>> tree
        {'a': [None, None, 'x']}
    """
    parts = split_write_path(path)
    if not parts:
        return

    node = root
    last = len(parts) - 1

    for position, part in enumerate(parts):
        walked = parts[:position + 1]
        terminal = position == last

        if isinstance(node, dict):
            if terminal:
                node[part] = value
                return
            if part not in node:
                node[part] = _new_container(parts[position + 1])
            node = node[part]
        elif isinstance(node, list):
            index = _parse_index(walked)
            if len(node) <= index:
                node.extend([None] * (index + 1 - len(node)))
            if terminal:
                node[index] = value
                return
            if node[index] is None:
                node[index] = _new_container(parts[position + 1])
            node = node[index]
        else:
            raise _invalid_type(walked, node)


def leaf_paths(root: Any) -> List[List[str]]:
    """
    List the segment path of every leaf in a tree.

    Mappings and sequences are expanded fully (sequence elements are addressed
    by their index as a string); scalars and nulls are leaves. Empty
    containers contribute no paths. A scalar root yields a single empty path.

    Args:
        root: The tree to enumerate

    Returns:
        List[List[str]]: One list of segments per leaf.
    """
    paths: List[List[str]] = []
    _collect_leaf_paths(root, [], paths)
    return paths


def _collect_leaf_paths(node: Any, base: List[str], paths: List[List[str]]) -> None:
    if isinstance(node, dict):
        for key, child in node.items():
            _collect_leaf_paths(child, base + [key], paths)
    elif isinstance(node, list):
        for index, child in enumerate(node):
            _collect_leaf_paths(child, base + [str(index)], paths)
    else:
        paths.append(base)
