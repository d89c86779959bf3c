"""
Array-aware deep merging for the DotConfig configuration system.

``extend_tree`` folds an overlay tree into a target tree:

- Sequences reachable from the overlay root through mapping keys alone are
  merged element-wise: overlay element ``i`` replaces target element ``i``
  and extra overlay elements are appended, so a longer target keeps its tail.
  When the target has no sequence at that path the overlay's sequence
  replaces whatever is there.
- Every other overlay leaf is set into the target at the same path.

Sequences nested inside sequence elements are not scanned on their own; they
travel with their enclosing sequence's elements.
"""

import copy
from typing import Any, List

from DotConfig.config.accessors import coerce_list
from DotConfig.config.paths import join_path
from DotConfig.config.tree import get_node, leaf_paths, set_node
from DotConfig.exceptions import DotConfigError


def find_array_paths(root: Any) -> List[str]:
    """
    Find the dotted path of every sequence reachable through mapping keys.

    The root itself is reported as ``""`` when it is a sequence. The scan
    descends into mapping values only; once a sequence is found its elements
    are not searched.

    Args:
        root: The tree to scan

    Returns:
        List[str]: Dotted paths whose node is a sequence.

    Examples:
        >>> find_array_paths({"a": [1, {"b": [2]}], "c": {"d": []}})
        ['a', 'c.d']
    """
    paths: List[str] = []
    _scan(root, "", paths)
    return paths


def _scan(node: Any, path: str, paths: List[str]) -> None:
    if isinstance(node, list):
        paths.append(path)
    elif isinstance(node, dict):
        for key, child in node.items():
            _scan(child, f"{path}.{key}" if path else key, paths)


def merge_sequences(base: List[Any], overlay: List[Any]) -> List[Any]:
    """
    Merge two sequences element-wise with overlay elements winning.

    Args:
        base: The sequence being extended (not modified)
        overlay: The sequence whose elements take precedence (not modified)

    Returns:
        List[Any]: A new list of length ``max(len(base), len(overlay))``.
    """
    merged = list(base)
    for index, item in enumerate(overlay):
        if index < len(merged):
            merged[index] = item
        else:
            merged.append(item)
    return merged


def _is_under(path: str, processed: List[str]) -> bool:
    return any(path == done or path.startswith(done + ".") for done in processed)


def extend_tree(target: Any, overlay: Any) -> None:
    """
    Merge ``overlay`` into ``target`` in place.

    ``target`` should be a private copy: a failure part way through leaves it
    partially merged. ``overlay`` is never modified and shares no containers
    with ``target`` afterwards.

    Args:
        target: The tree receiving values
        overlay: The tree providing values

    Raises:
        DotConfigError: Any path or type error from reading the overlay or
            setting into the target.
    """
    processed: List[str] = []

    for path in find_array_paths(overlay):
        if path == "":
            continue

        source = copy.deepcopy(coerce_list(get_node(overlay, path)))
        try:
            existing = coerce_list(get_node(target, path))
        except DotConfigError:
            set_node(target, path, source)
        else:
            set_node(target, path, merge_sequences(existing, source))

        processed.append(path)

    for parts in leaf_paths(overlay):
        path = join_path(parts)
        if _is_under(path, processed):
            continue
        set_node(target, path, get_node(overlay, path))
