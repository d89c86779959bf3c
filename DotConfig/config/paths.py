"""
Dotted path parsing for the DotConfig configuration system.

Two tokenizers exist:

- ``split_read_path`` is used by every read (``get_node`` and the typed
  accessors). It splits on ``.`` except inside ``[...]``, so a key that itself
  contains dots can be addressed as ``root.[a.b]``.
- ``split_write_path`` is used by ``set_node``. It is a plain split on ``.``
  and gives brackets no special meaning.

In both, a leading empty segment (a path starting with ``.``) is dropped and
any other empty segment raises ``InvalidPathError``.
"""

import re
from typing import List, Optional

from DotConfig.exceptions import InvalidPathError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _normalize(path: str, parts: List[str]) -> List[str]:
    for position, part in enumerate(parts):
        if part == "" and position != 0:
            raise InvalidPathError(
                f"invalid path {path!r}",
                context={"path": path},
            )
    if parts and parts[0] == "":
        return parts[1:]
    return parts


def _tokenize(path: str) -> List[str]:
    parts: List[str] = []
    buffer: List[str] = []
    in_brackets = False

    for char in path:
        if char in "[]":
            in_brackets = char == "["
            continue
        if char == "." and not in_brackets:
            parts.append("".join(buffer))
            buffer = []
            continue
        buffer.append(char)

    # A trailing separator never produces an empty segment
    if buffer:
        parts.append("".join(buffer))
    return parts


def split_read_path(path: str) -> List[str]:
    """
    Split a read path into segments, honouring bracket-quoted segments.

    Args:
        path: Dotted path such as ``"database.hosts.0"`` or ``"root.[a.b].c"``

    Returns:
        List[str]: The path segments, in order. An empty path yields ``[]``.

    Raises:
        InvalidPathError: If an empty segment appears anywhere but first.

    Examples:
        >>> split_read_path("root.[field.one].name")
        ['root', 'field.one', 'name']
        >>> split_read_path(".a.b")
        ['a', 'b']
    """
    return _normalize(path, _tokenize(path))


def split_write_path(path: str) -> List[str]:
    """
    Split a write path into segments on every ``.``.

    Args:
        path: Dotted path such as ``"servers.2.host"``

    Returns:
        List[str]: The path segments. An empty path yields ``[]``.

    Raises:
        InvalidPathError: If an empty segment appears anywhere but first.
    """
    return _normalize(path, path.split("."))


def parse_integer(segment: str) -> Optional[int]:
    """Return the base-10 integer a segment spells, or None if it is not one."""
    if _INTEGER_RE.fullmatch(segment):
        return int(segment)
    return None


def join_path(parts: List[str]) -> str:
    """Join path segments back into a dotted path."""
    return ".".join(parts)
