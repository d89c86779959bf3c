"""
The Config handle for the DotConfig configuration system.

This module implements the Config class, a thin handle over a configuration
tree that provides dotted-path access, typed reads with optional defaults,
merging, snapshots, and environment/command-line overrides.
"""

import sys
from typing import Any, Callable, Dict, List, Optional, Sequence

from DotConfig.config.accessors import (
    coerce_bool,
    coerce_float,
    coerce_int,
    coerce_list,
    coerce_map,
    coerce_string,
)
from DotConfig.config.bindings import apply_args, apply_env
from DotConfig.config.merge import extend_tree
from DotConfig.config.tree import get_node, set_node
from DotConfig.exceptions import DotConfigError
from DotConfig.utils.logging import get_logger

logger = get_logger(__name__)


def _first_or(defaults: Sequence[Any], zero: Any) -> Any:
    return defaults[0] if defaults else zero


class Config:
    """
    Handle over a configuration tree.

    Features:
    - Hierarchical access with dotted paths (e.g. "database.hosts.0")
    - Bracket-quoted read segments for keys containing dots ("root.[a.b]")
    - Typed accessors, each with a default-substituting ``safe_*`` variant
    - Array-aware merging of two configurations (``extend``)
    - Overrides from environment variables and command-line options

    A Config returned by ``get`` shares its tree with the Config it came
    from: setting a value through the child is visible through the parent.
    ``copy`` is the only way to obtain an independent tree.

    Config does no locking. When a tree is shared between threads, guard
    every ``set``, ``extend``, ``env`` and ``args`` call with a lock, or hand
    other threads a ``copy``.

    Attributes:
        root: The underlying tree (dicts, lists and scalars)
    """

    def __init__(self, root: Any = None) -> None:
        self.root = root
        self._last_error: Optional[Exception] = None

    def __repr__(self) -> str:
        return f"Config(root={self.root!r})"

    @property
    def last_error(self) -> Optional[Exception]:
        """The failure recorded by the last ``args`` call, or None."""
        return self._last_error

    def get(self, path: str) -> 'Config':
        """
        Get the configuration at a dotted path.

        Args:
            path (str): Read path, e.g. "database.hosts.0" or "root.[a.b]"

        Returns:
            Config: A handle sharing the subtree at ``path``.

        Raises:
            PathError: If the path cannot be resolved.

        Examples:
            >>> database = config.get("database")
            >>> database.set("port", 5432)  # also visible via config
        """
        return Config(get_node(self.root, path))

    def set(self, path: str, value: Any) -> None:
        """
        Set a configuration value using dot notation.

        Missing mappings and lists are created along the way; lists are
        padded with None up to the addressed index. The write is not
        transactional: on failure, containers created before the failing
        segment remain.

        Args:
            path (str): Write path, e.g. "servers.2.host" (no bracket segments)
            value (Any): Value to set

        Raises:
            PathError: If the path is malformed or runs through a leaf.

        Examples:
            >>> config.set("database.type", "postgresql")
            >>> config.set("servers.0.port", 8080)
        """
        set_node(self.root, path, value)

    # Typed accessors

    def get_bool(self, path: str) -> bool:
        """Return the value at ``path`` as a bool (accepts bools and boolean strings)."""
        return coerce_bool(get_node(self.root, path))

    def get_int(self, path: str) -> int:
        """Return the value at ``path`` as an int (accepts ints, integral floats, numeric strings)."""
        return coerce_int(get_node(self.root, path))

    def get_float(self, path: str) -> float:
        """Return the value at ``path`` as a float (accepts floats, ints, numeric strings)."""
        return coerce_float(get_node(self.root, path))

    def get_string(self, path: str) -> str:
        """Return the value at ``path`` as a str, rendering bools and numbers."""
        return coerce_string(get_node(self.root, path))

    def get_list(self, path: str) -> List[Any]:
        """Return the list at ``path`` (shared with the tree)."""
        return coerce_list(get_node(self.root, path))

    def get_map(self, path: str) -> Dict[str, Any]:
        """Return the mapping at ``path`` (shared with the tree)."""
        return coerce_map(get_node(self.root, path))

    # Default-substituting accessors

    def safe_bool(self, path: str, *defaults: bool) -> bool:
        """
        Return the value at ``path`` as a bool, or a default.

        Args:
            path (str): Read path
            *defaults (bool): The first one is returned when the value is
                missing or not convertible

        Returns:
            bool: The value, the first default, or False.

        Examples:
            >>> config.safe_bool("features.cache", True)
        """
        try:
            return self.get_bool(path)
        except DotConfigError:
            return _first_or(defaults, False)

    def safe_int(self, path: str, *defaults: int) -> int:
        """Return the value at ``path`` as an int, or the first default, or 0."""
        try:
            return self.get_int(path)
        except DotConfigError:
            return _first_or(defaults, 0)

    def safe_float(self, path: str, *defaults: float) -> float:
        """Return the value at ``path`` as a float, or the first default, or 0.0."""
        try:
            return self.get_float(path)
        except DotConfigError:
            return _first_or(defaults, 0.0)

    def safe_string(self, path: str, *defaults: str) -> str:
        """Return the value at ``path`` as a str, or the first default, or ""."""
        try:
            return self.get_string(path)
        except DotConfigError:
            return _first_or(defaults, "")

    def safe_list(self, path: str, *defaults: List[Any]) -> List[Any]:
        """Return the list at ``path``, or the first default, or a new empty list."""
        try:
            return self.get_list(path)
        except DotConfigError:
            return _first_or(defaults, [])

    def safe_map(self, path: str, *defaults: Dict[str, Any]) -> Dict[str, Any]:
        """Return the mapping at ``path``, or the first default, or a new empty dict."""
        try:
            return self.get_map(path)
        except DotConfigError:
            return _first_or(defaults, {})

    # Copying and merging

    def copy(self, *dotted_path: str) -> 'Config':
        """
        Return an independent deep copy of the configuration or a subtree.

        The copy is made by rendering to YAML and parsing the result, so only
        supported value types survive and no object is shared with the source.

        Args:
            *dotted_path (str): Optional path pieces; empty pieces are ignored
                and the rest are joined with "."

        Returns:
            Config: The copy.

        Raises:
            PathError: If the subtree path cannot be resolved.
            SerializationError: If the tree holds values YAML cannot represent.

        Examples:
            >>> servers = config.copy("config", "server")
            >>> same = config.copy("config.server")
        """
        from DotConfig.config.serialization import parse_yaml, render_yaml

        path = ".".join(part for part in dotted_path if part)
        source = self.get(path) if path else self
        return parse_yaml(render_yaml(source.root))

    def extend(self, other: 'Config') -> 'Config':
        """
        Merge another configuration over a copy of this one.

        Lists found under mapping keys of ``other`` are merged element-wise
        (``other`` wins per index, a longer list here keeps its tail); every
        other leaf of ``other`` replaces the value at the same path. Neither
        configuration is modified.

        Args:
            other (Config): The overlay configuration

        Returns:
            Config: The merged configuration.

        Raises:
            DotConfigError: If the overlay cannot be applied; no partial
                result is returned.

        Examples:
            >>> effective = defaults.extend(environment_overrides)
        """
        merged = self.copy()
        extend_tree(merged.root, other.root)
        return merged

    # External overrides

    def env(self, prefix: str = "") -> 'Config':
        """
        Override existing keys from environment variables.

        ``database.host`` is read from ``DATABASE_HOST``, or from
        ``<PREFIX>_DATABASE_HOST`` when a prefix is given. Values are stored
        as strings.

        Args:
            prefix (str): Optional environment variable prefix

        Returns:
            Config: self, for chaining.
        """
        apply_env(self, prefix)
        return self

    def flag(self) -> 'Config':
        """
        Override existing keys from the process command line.

        ``database.host`` is set by ``--database-host VALUE`` (or
        ``-database-host=VALUE``). A parse failure prints the usage error and
        exits with status 2.

        Returns:
            Config: self, for chaining.
        """
        prog_name = sys.argv[0] if sys.argv else None
        error = apply_args(self, sys.argv[1:], prog_name)
        if error is not None:
            error.show()
            raise SystemExit(error.exit_code)
        return self

    def args(self, argv: Sequence[str]) -> 'Config':
        """
        Override existing keys from an explicit argument vector.

        Args:
            argv (Sequence[str]): Program name followed by arguments, in the
                shape of ``sys.argv``. With no arguments after the program
                name nothing happens.

        Returns:
            Config: self, for chaining. A parse failure is not raised; it is
            available as ``last_error`` (which is reset on success).
        """
        if len(argv) <= 1:
            return self
        self._last_error = apply_args(self, argv[1:], argv[0])
        return self


def must(loader: Callable[..., Config], *args: Any, **kwargs: Any) -> Config:
    """
    Call a configuration loader and abort the program if it fails.

    Intended for module-level initialization where an invalid configuration
    cannot be recovered from.

    Args:
        loader: A callable returning a Config (e.g. ``parse_yaml``)
        *args: Positional arguments for the loader
        **kwargs: Keyword arguments for the loader

    Returns:
        Config: The loaded configuration.

    Raises:
        SystemExit: If the loader raises a DotConfigError.

    Examples:
        >>> config = must(parse_yaml_file, "settings.yml")
    """
    try:
        return loader(*args, **kwargs)
    except DotConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        raise SystemExit(1) from e
