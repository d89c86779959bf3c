"""
External overrides for existing configuration keys.

Both binders work over a fixed key space: they only look for overrides of
leaf paths already present in the configuration and never introduce new keys.

- ``apply_env`` maps ``servers.0.host`` to ``SERVERS_0_HOST`` (optionally
  ``<PREFIX>_SERVERS_0_HOST``) and sets the raw string value on a hit.
- ``apply_args`` registers one click option per leaf path
  (``--servers-0-host``, also accepted as ``-servers-0-host``) and sets the
  string value of every option given on the command line. As with a
  conventional flag parser, options end at the first positional argument.
"""

import os
from typing import Dict, List, Optional, Sequence, Set, Tuple, TYPE_CHECKING

import click
from click.core import ParameterSource

from DotConfig.config.paths import join_path
from DotConfig.config.tree import leaf_paths
from DotConfig.exceptions import DotConfigError
from DotConfig.utils.logging import get_logger

if TYPE_CHECKING:
    from DotConfig.config.manager import Config

logger = get_logger(__name__)


def env_var_name(parts: List[str], prefix: str = "") -> str:
    """
    Build the environment variable name for a leaf path.

    Examples:
        >>> env_var_name(["map", "key8"], "app")
        'APP_MAP_KEY8'
    """
    name = "_".join(parts).upper()
    if prefix:
        return f"{prefix.upper()}_{name}"
    return name


def apply_env(config: "Config", prefix: str = "") -> int:
    """
    Override existing leaf values from environment variables.

    A variable that is set, even to an empty string, overrides the value.
    Values are stored as raw strings; the typed accessors convert on read.

    Args:
        config: The configuration to update in place
        prefix: Optional variable name prefix (joined with ``_``)

    Returns:
        int: Number of values overridden.
    """
    applied = 0
    for parts in leaf_paths(config.root):
        name = env_var_name(parts, prefix)
        if name not in os.environ:
            continue
        path = join_path(parts)
        try:
            config.set(path, os.environ[name])
        except DotConfigError as e:
            logger.debug(f"Ignoring {name}: cannot set {path!r}: {e}")
            continue
        logger.debug(f"Overrode {path!r} from environment variable {name}")
        applied += 1
    return applied


def _option_names(config: "Config") -> Dict[str, str]:
    """Map option flag names (without dashes) to dotted leaf paths."""
    names: Dict[str, str] = {}
    for parts in leaf_paths(config.root):
        flag = "-".join(parts)
        if not flag or "/" in flag or any(char.isspace() for char in flag):
            logger.debug(f"Skipping leaf path {parts!r}: not usable as an option name")
            continue
        names.setdefault(flag, join_path(parts))
    return names


def build_command(config: "Config", prog_name: str) -> Tuple[click.Command, Dict[str, str]]:
    """
    Build a click command with one string option per leaf path.

    Each option defaults to the leaf's current value rendered as a string.

    Returns:
        Tuple[click.Command, Dict[str, str]]: The command, and a mapping from
        each option's parameter name (``key_<n>``) to its dotted leaf path.
    """
    params = []
    key_paths: Dict[str, str] = {}

    for position, (flag, path) in enumerate(_option_names(config).items()):
        dest = f"key_{position}"
        key_paths[dest] = path
        params.append(click.Option(
            [f"--{flag}", f"-{flag}", dest],
            type=str,
            default=config.safe_string(path),
            show_default=True,
        ))

    command = click.Command(
        prog_name,
        params=params,
        add_help_option=False,
        context_settings={"allow_extra_args": True, "allow_interspersed_args": False},
    )
    return command, key_paths


def _normalize_args(argv: Sequence[str], flags: Set[str]) -> List[str]:
    """
    Rewrite ``-x=value`` as ``--x=value`` for one-letter flags.

    click registers a one-letter ``-x`` as a short option and would take
    ``=value`` as its attached value. Values following a flag are left alone.
    """
    normalized: List[str] = []
    expects_value = False
    for position, arg in enumerate(argv):
        if expects_value:
            expects_value = False
        elif arg == "--" or not arg.startswith("-"):
            # Parsing stops at the first non-flag argument
            normalized.extend(argv[position:])
            break
        else:
            name, sep, value = arg.lstrip("-").partition("=")
            if not sep:
                expects_value = name in flags
            elif len(name) == 1 and name in flags and not arg.startswith("--"):
                arg = f"--{name}={value}"
        normalized.append(arg)
    return normalized


def apply_args(config: "Config", argv: Sequence[str],
               prog_name: Optional[str] = None) -> Optional[click.ClickException]:
    """
    Override existing leaf values from command-line options.

    Args:
        config: The configuration to update in place
        argv: Arguments to parse, without the program name
        prog_name: Program name used in usage messages

    Returns:
        Optional[click.ClickException]: The parse failure, or None on success.
        Nothing is overridden when parsing fails.
    """
    command, key_paths = build_command(config, prog_name or "config")
    args = _normalize_args(argv, set(_option_names(config)))
    try:
        ctx = command.make_context(prog_name, args)
    except click.ClickException as e:
        logger.debug(f"Command-line parsing failed: {e.format_message()}")
        return e

    with ctx:
        for dest, path in key_paths.items():
            if ctx.get_parameter_source(dest) is not ParameterSource.COMMANDLINE:
                continue
            try:
                config.set(path, ctx.params[dest])
            except DotConfigError as e:
                logger.debug(f"Ignoring option for {path!r}: {e}")
                continue
            logger.debug(f"Overrode {path!r} from the command line")
    return None
