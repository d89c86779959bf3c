"""
Reading and writing configuration trees as JSON or YAML.

Decoding always runs ``normalize_value`` so that a parsed tree only holds
string-keyed dicts, lists, and bool/int/float/str/None leaves. Anything else
(a YAML integer key, a ``!!set``, a binary blob, ...) is rejected with
``UnsupportedValueError``. YAML timestamps are left as plain strings.

Encoding is deterministic (sorted keys), so rendering a tree, parsing the
text and rendering again yields identical text.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from DotConfig.config.manager import Config
from DotConfig.config.tree import describe
from DotConfig.exceptions import SerializationError, UnsupportedValueError
from DotConfig.utils.logging import get_logger

logger = get_logger(__name__)

_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as strings."""


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def normalize_value(value: Any) -> Any:
    """
    Recursively copy a decoded value into canonical tree form.

    Args:
        value: Output of a JSON or YAML decoder

    Returns:
        Any: An equivalent tree of dicts with string keys, lists and scalars.

    Raises:
        UnsupportedValueError: For a non-string mapping key or an unsupported leaf.
    """
    if isinstance(value, dict):
        node = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    f"unsupported map key: {key!r}",
                    context={"key": repr(key), "actual": describe(key)},
                )
            node[key] = normalize_value(item)
        return node
    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise UnsupportedValueError(
        f"unsupported value: {value!r}",
        context={"value": repr(value), "actual": describe(value)},
    )


def parse_json(text: Union[str, bytes]) -> Config:
    """
    Parse a JSON document into a Config.

    Args:
        text: JSON text

    Returns:
        Config: A new configuration wrapping the decoded tree.

    Raises:
        SerializationError: If the text is not valid JSON.
        UnsupportedValueError: If the decoded tree holds unsupported values.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializationError(f"invalid JSON: {e}", cause=e) from e
    return Config(normalize_value(data))


def parse_json_file(filename: Union[str, Path]) -> Config:
    """Read and parse a JSON file."""
    path = Path(filename)
    logger.debug(f"Loading JSON configuration from {path}")
    return parse_json(path.read_text(encoding='utf-8'))


def render_json(root: Any) -> str:
    """
    Render a tree as compact JSON with sorted keys.

    Raises:
        SerializationError: If the tree holds values JSON cannot represent
            (including NaN and infinities).
    """
    try:
        return json.dumps(root, sort_keys=True, separators=(',', ':'),
                          ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot render JSON: {e}", cause=e) from e


def parse_yaml(text: Union[str, bytes]) -> Config:
    """
    Parse a YAML document into a Config.

    Args:
        text: YAML text (str or UTF-8 bytes)

    Returns:
        Config: A new configuration wrapping the decoded tree.

    Raises:
        SerializationError: If the text is not valid YAML.
        UnsupportedValueError: If the decoded tree holds unsupported values.
    """
    try:
        data = yaml.load(text, Loader=_ConfigLoader)
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: an integer literal past the interpreter's digit limit
        raise SerializationError(f"invalid YAML: {e}", cause=e) from e
    return Config(normalize_value(data))


def parse_yaml_file(filename: Union[str, Path]) -> Config:
    """Read and parse a YAML file."""
    path = Path(filename)
    logger.debug(f"Loading YAML configuration from {path}")
    return parse_yaml(path.read_bytes())


def render_yaml(root: Any) -> str:
    """
    Render a tree as block-style YAML with sorted keys.

    Raises:
        SerializationError: If the tree holds values YAML safe dumping rejects.
    """
    try:
        return yaml.safe_dump(root, default_flow_style=False, sort_keys=True,
                              allow_unicode=True)
    except (yaml.YAMLError, ValueError) as e:
        raise SerializationError(f"cannot render YAML: {e}", cause=e) from e


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in ('.yaml', '.yml'):
        return 'yaml'
    if suffix == '.json':
        return 'json'
    raise ValueError(f"Unsupported configuration file format: {path.suffix}")


def load_file(path: Union[str, Path]) -> Config:
    """
    Load a configuration file, choosing the decoder from the file suffix.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        Config: The parsed configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is not recognised.
        SerializationError: If the file cannot be decoded.

    Examples:
        >>> cfg = load_file("settings.yml")
        >>> cfg.get_string("database.host")
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    if _format_for(path) == 'json':
        return parse_json_file(path)
    return parse_yaml_file(path)


def save_file(config: Config, path: Union[str, Path]) -> None:
    """
    Write a configuration to disk, choosing the encoder from the file suffix.

    Args:
        config: The configuration to write
        path: Destination ``.json``, ``.yaml`` or ``.yml`` file

    Raises:
        ValueError: If the suffix is not recognised.
        SerializationError: If the tree cannot be encoded.
    """
    path = Path(path)
    if _format_for(path) == 'json':
        text = render_json(config.root)
    else:
        text = render_yaml(config.root)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    logger.debug(f"Saved configuration to {path}")
