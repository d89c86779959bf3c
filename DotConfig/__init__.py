"""
DotConfig - dotted-path access to hierarchical configuration data.

This package gives applications a single handle over configuration trees
parsed from JSON or YAML. Values are read, written, merged and overridden with
dotted path strings instead of manual traversal.

Key Components:
- Config: Handle with get/set, typed accessors, copy, extend and overrides
- Parsers: parse_json/parse_yaml (and *_file variants), load_file by suffix
- CLI: The ``dotconfig`` command for inspecting and merging config files

Usage Examples:
    # Reading and writing values
    from DotConfig import parse_yaml
    config = parse_yaml("database:\\n  host: localhost\\n")
    config.get_string("database.host")      # 'localhost'
    config.safe_int("database.port", 5432)  # 5432
    config.set("database.port", 6543)

    # Layering an override file and the environment over defaults
    from DotConfig import load_file
    effective = load_file("defaults.yml").extend(load_file("prod.yml")).env("myapp")

    # Setting the log level
    from DotConfig import set_log_level
    set_log_level('debug')
"""

__version__ = '1.0.0'

from DotConfig.utils.logging import get_logger, set_log_level, configure_logging

from DotConfig.config import (
    Config,
    must,
    load_file,
    save_file,
    parse_json,
    parse_json_file,
    render_json,
    parse_yaml,
    parse_yaml_file,
    render_yaml,
)
from DotConfig.exceptions import (
    DotConfigError,
    PathError,
    InvalidPathError,
    NoSuchKeyError,
    IndexOutOfRangeError,
    InvalidIndexError,
    InvalidTypeError,
    TypeMismatchError,
    ConversionError,
    SerializationError,
    UnsupportedValueError,
)

__all__ = [
    'Config', 'must', 'load_file', 'save_file',
    'parse_json', 'parse_json_file', 'render_json',
    'parse_yaml', 'parse_yaml_file', 'render_yaml',
    'DotConfigError', 'PathError', 'InvalidPathError', 'NoSuchKeyError',
    'IndexOutOfRangeError', 'InvalidIndexError', 'InvalidTypeError',
    'TypeMismatchError', 'ConversionError', 'SerializationError',
    'UnsupportedValueError',
    'get_logger', 'set_log_level', 'configure_logging',
]
