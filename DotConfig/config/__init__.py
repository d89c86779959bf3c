"""
DotConfig Configuration System.

This package provides a single handle over hierarchical configuration data
parsed from JSON or YAML, with dotted-path reads and writes, typed accessors,
array-aware merging, and environment/command-line overrides.

Usage:
    from DotConfig.config import parse_yaml

    config = parse_yaml(text)

    # Get a configuration value
    host = config.get_string("database.host")

    # Set a configuration value
    config.set("database.port", 5432)

    # Layer overrides on top of defaults
    effective = config.extend(parse_yaml(override_text)).env("myapp")
"""

from DotConfig.config.manager import Config, must
from DotConfig.config.merge import find_array_paths
from DotConfig.config.serialization import (
    load_file,
    normalize_value,
    parse_json,
    parse_json_file,
    parse_yaml,
    parse_yaml_file,
    render_json,
    render_yaml,
    save_file,
)
from DotConfig.config.tree import NodeKind, get_node, kind_of, leaf_paths, set_node

__all__ = [
    "Config", "must",
    "parse_json", "parse_json_file", "render_json",
    "parse_yaml", "parse_yaml_file", "render_yaml",
    "load_file", "save_file", "normalize_value",
    "get_node", "set_node", "leaf_paths", "find_array_paths",
    "NodeKind", "kind_of",
]
