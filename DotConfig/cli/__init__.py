"""
Command-line interface module for the DotConfig package.

This module provides the ``dotconfig`` command-line tool for inspecting,
editing and merging configuration files.

Key Components:
- main: Main entry point for the CLI
- Commands: show, get, set, merge, keys, validate
"""

from DotConfig.cli.commands import main

__all__ = ['main']
