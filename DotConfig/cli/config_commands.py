"""
Configuration file commands for the DotConfig CLI.

Each function implements one command and returns an exit code (0 for
success, 1 for a handled error). Errors are logged, not raised.
"""

from pathlib import Path
from typing import Any, List, Optional, Sequence

import click

from DotConfig.config import Config, leaf_paths, load_file, render_json, render_yaml, save_file
from DotConfig.config.accessors import coerce_string
from DotConfig.exceptions import DotConfigError
from DotConfig.utils import log_error
from DotConfig.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)

# Errors a command reports instead of crashing on
HANDLED_ERRORS = (DotConfigError, OSError, ValueError)

VALUE_TYPES = ('string', 'int', 'float', 'bool', 'list', 'map')


def _render(root: Any, format_type: str) -> str:
    if format_type.lower() == 'json':
        return render_json(root)
    return render_yaml(root).rstrip('\n')


def config_show(config_path: str, format_type: str = 'yaml', path: Optional[str] = None) -> int:
    """
    Display a configuration file, or the subtree at a path.

    Args:
        config_path: Path to the configuration file
        format_type: Output format (yaml or json)
        path: Optional dotted path of the subtree to display

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_file(config_path)
        if path:
            config = config.get(path)
        click.echo(_render(config.root, format_type))
        return 0
    except HANDLED_ERRORS as e:
        log_error(e, f"Error displaying {config_path}")
        return 1


def config_get(config_path: str, path: str, value_type: str = 'string',
               default: Optional[str] = None) -> int:
    """
    Print a single typed value.

    With a default, the default-substituting accessor is used. The default is
    converted to the requested type first and must itself be valid.

    Args:
        config_path: Path to the configuration file
        path: Dotted path of the value
        value_type: One of VALUE_TYPES
        default: Optional default (parsed from text for non-string types)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_file(config_path)

        if default is None:
            value = getattr(config, f"get_{value_type}")(path)
        else:
            fallback = getattr(Config(default), f"get_{value_type}")("")
            value = getattr(config, f"safe_{value_type}")(path, fallback)

        if isinstance(value, (list, dict)):
            click.echo(render_json(value))
        else:
            click.echo(coerce_string(value))
        return 0
    except HANDLED_ERRORS as e:
        log_error(e, f"Error reading {path!r} from {config_path}")
        return 1


def config_set(config_path: str, path: str, value: str, output_path: Optional[str] = None) -> int:
    """
    Set a string value and save the result.

    Args:
        config_path: Path to the configuration file
        path: Dotted write path
        value: The string to store
        output_path: Where to save (defaults to overwriting config_path)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_file(config_path)
        config.set(path, value)
        destination = Path(output_path or config_path)
        save_file(config, destination)
        logger.info(f"Set {path!r} in {destination}")
        return 0
    except HANDLED_ERRORS as e:
        log_error(e, f"Error setting {path!r} in {config_path}")
        return 1


def config_merge(config_paths: Sequence[str], format_type: str = 'yaml',
                 output_path: Optional[str] = None) -> int:
    """
    Merge configuration files left to right and print or save the result.

    Args:
        config_paths: The base file followed by one or more overlays
        format_type: Output format when printing (yaml or json)
        output_path: Optional file to save to (format by suffix)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        merged = load_file(config_paths[0])
        for overlay_path in config_paths[1:]:
            merged = merged.extend(load_file(overlay_path))
            logger.debug(f"Merged {overlay_path}")

        if output_path:
            save_file(merged, output_path)
            logger.info(f"Merged configuration written to {output_path}")
        else:
            click.echo(_render(merged.root, format_type))
        return 0
    except HANDLED_ERRORS as e:
        log_error(e, "Error merging configuration files")
        return 1


def config_keys(config_path: str) -> int:
    """
    List every leaf path in a configuration file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_file(config_path)
        keys: List[str] = [".".join(parts) for parts in leaf_paths(config.root) if parts]
        for key in keys:
            click.echo(key)
        return 0
    except HANDLED_ERRORS as e:
        log_error(e, f"Error listing keys of {config_path}")
        return 1


def config_validate(config_path: str) -> int:
    """
    Check that a configuration file decodes into a supported tree.

    Only syntax and value types are checked; there is no schema.

    Args:
        config_path: Path to the configuration file to validate

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        load_file(config_path)
    except HANDLED_ERRORS as e:
        click.echo(f"Configuration file is invalid: {config_path}")
        click.echo(f"  - {e}")
        logger.debug(f"Validation of {config_path} failed: {e}")
        return 1

    click.echo(f"Configuration file is valid: {config_path}")
    return 0
