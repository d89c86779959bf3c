"""
Typed coercion of configuration nodes.

Each ``coerce_*`` function takes a node already resolved from a tree and
returns it as the requested Python type, or raises ``TypeMismatchError``
(``ConversionError`` when the node's kind is accepted but its value cannot be
converted, e.g. ``4.2`` read as an integer).

| Target   | Accepts                                                       |
|----------|---------------------------------------------------------------|
| bool     | bool; str spelling a boolean                                  |
| int      | int; float whose text form equals its integer's; base-10 str  |
| float    | float; int (promoted); decimal str                            |
| str      | bool/int/float rendered canonically; str                      |
| list     | list only                                                     |
| dict     | dict only                                                     |
"""

import math
import re
from typing import Any, Dict, List

from DotConfig.config.tree import describe
from DotConfig.exceptions import ConversionError, TypeMismatchError

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _type_mismatch(expected: str, node: Any) -> TypeMismatchError:
    actual = describe(node)
    return TypeMismatchError(
        f"type mismatch: expected {expected}; got {actual}",
        context={"expected": expected, "actual": actual},
    )


def _conversion_error(target: str, node: Any, cause: Exception = None) -> ConversionError:
    preview = _preview(node)
    return ConversionError(
        f"value can't be converted to {target}: {preview}",
        context={"expected": target, "actual": describe(node), "value": preview},
        cause=cause,
    )


def _preview(node: Any, limit: int = 64) -> str:
    if isinstance(node, int) and not isinstance(node, bool):
        # repr() of an int past the digit limit raises ValueError
        text = repr(node) if node.bit_length() < 4 * limit else f"<int of {node.bit_length()} bits>"
    else:
        text = repr(node)
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_scalar(node: Any) -> str:
    """
    Render a scalar in its canonical text form.

    Booleans become ``true``/``false``. Floats holding an integral value below
    1e21 render without a fractional part (``42.0`` -> ``"42"``), others use
    the shortest round-tripping form.

    Args:
        node: A bool, int or float

    Returns:
        str: The canonical text.
    """
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, float):
        if math.isnan(node):
            return "NaN"
        if math.isinf(node):
            return "+Inf" if node > 0 else "-Inf"
        if node.is_integer() and abs(node) < 1e21:
            return str(int(node))
        return repr(node)
    return str(node)


def coerce_bool(node: Any) -> bool:
    """Read a node as a boolean."""
    if isinstance(node, bool):
        return node
    if isinstance(node, str):
        if node in _TRUE_STRINGS:
            return True
        if node in _FALSE_STRINGS:
            return False
        raise _conversion_error("bool", node)
    raise _type_mismatch("bool or string", node)


def coerce_int(node: Any) -> int:
    """
    Read a node as an integer.

    Floats are accepted only when their canonical text equals that of the
    truncated integer, so ``42.0`` gives ``42`` while ``4.2`` and ``1e21`` fail.
    """
    if isinstance(node, bool):
        raise _type_mismatch("float, int or string", node)
    if isinstance(node, int):
        return node
    if isinstance(node, float):
        if math.isfinite(node):
            truncated = int(node)
            if str(truncated) == format_scalar(node):
                return truncated
        raise _conversion_error("int", node)
    if isinstance(node, str):
        if _INTEGER_RE.fullmatch(node):
            try:
                return int(node)
            except ValueError as e:
                raise _conversion_error("int", node, e) from e
        raise _conversion_error("int", node)
    raise _type_mismatch("float, int or string", node)


def coerce_float(node: Any) -> float:
    """Read a node as a float, promoting integers."""
    if isinstance(node, bool):
        raise _type_mismatch("float, int or string", node)
    if isinstance(node, (int, float)):
        try:
            return float(node)
        except OverflowError as e:
            raise _conversion_error("float", node, e) from e
    if isinstance(node, str):
        # float() tolerates surrounding whitespace and digit underscores
        if node and node == node.strip() and "_" not in node:
            try:
                return float(node)
            except ValueError:
                pass
        raise _conversion_error("float", node)
    raise _type_mismatch("float, int or string", node)


def coerce_string(node: Any) -> str:
    """Read a node as a string, rendering scalars canonically."""
    if isinstance(node, str):
        return node
    if isinstance(node, (bool, int, float)):
        try:
            return format_scalar(node)
        except ValueError as e:
            raise _conversion_error("string", node, e) from e
    raise _type_mismatch("bool, float, int or string", node)


def coerce_list(node: Any) -> List[Any]:
    """Return a sequence node as is (shared, not copied)."""
    if isinstance(node, list):
        return node
    raise _type_mismatch("list", node)


def coerce_map(node: Any) -> Dict[str, Any]:
    """Return a mapping node as is (shared, not copied)."""
    if isinstance(node, dict):
        return node
    raise _type_mismatch("map", node)
