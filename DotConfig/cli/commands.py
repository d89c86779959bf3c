"""
Command-line interface (CLI) commands for the DotConfig package.

This module provides the ``dotconfig`` command group for inspecting, editing
and merging JSON and YAML configuration files from the command line.
"""

import sys

import click

from DotConfig import __version__
from DotConfig.cli.config_commands import (
    VALUE_TYPES,
    config_get,
    config_keys,
    config_merge,
    config_set,
    config_show,
    config_validate,
)
from DotConfig.utils import log_error
from DotConfig.utils.logging import LOG_LEVELS, get_logger, set_log_level

# Get a logger for this module
logger = get_logger(__name__)

# Common options
def format_option(f):
    return click.option('--format', 'format_type', type=click.Choice(['yaml', 'json'], case_sensitive=False),
                        default='yaml', help='Output format (yaml or json)')(f)

# Apply the log level if specified on the command line
def apply_log_level(ctx, param, value):
    if value:
        set_log_level(value)
    return value

@click.group()
@click.option('--log-level',
              type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
              callback=apply_log_level, expose_value=False, is_eager=True,
              help='Set the logging level')
@click.version_option(version=__version__, prog_name='dotconfig')
def cli():
    """DotConfig CLI for JSON and YAML configuration files."""
    pass

@cli.command('show')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.option('--path', help='Show only the subtree at this dotted path')
@format_option
@click.pass_context
def show_command(ctx, config_path, path, format_type):
    """Display a configuration file."""
    ctx.exit(config_show(config_path, format_type, path))

@cli.command('get')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.argument('path')
@click.option('--type', 'value_type', type=click.Choice(VALUE_TYPES), default='string',
              help='Type to read the value as (default: string)')
@click.option('--default', help='Value to print when the path is missing or not convertible (scalar types only)')
@click.pass_context
def get_command(ctx, config_path, path, value_type, default):
    """Print the value at PATH."""
    if default is not None and value_type in ('list', 'map'):
        raise click.UsageError(f"--default is not supported with --type {value_type}")
    ctx.exit(config_get(config_path, path, value_type, default))

@cli.command('set')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.argument('path')
@click.argument('value')
@click.option('--output', 'output_path', help='Write the result here instead of updating CONFIG_PATH')
@click.pass_context
def set_command(ctx, config_path, path, value, output_path):
    """Set PATH to the string VALUE and save the file."""
    ctx.exit(config_set(config_path, path, value, output_path))

@cli.command('merge')
@click.argument('config_paths', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--output', 'output_path', help='Write the merged configuration to this file')
@format_option
@click.pass_context
def merge_command(ctx, config_paths, output_path, format_type):
    """
    Merge configuration files from left to right.

    Later files override earlier ones; lists are merged element by element.
    """
    if len(config_paths) < 2:
        raise click.UsageError("merge needs a base file and at least one overlay")
    ctx.exit(config_merge(config_paths, format_type, output_path))

@cli.command('keys')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.pass_context
def keys_command(ctx, config_path):
    """List the dotted path of every value in a configuration file."""
    ctx.exit(config_keys(config_path))

@cli.command('validate')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.pass_context
def validate_command(ctx, config_path):
    """Check that a configuration file can be read."""
    ctx.exit(config_validate(config_path))

def main():
    """Main entry point for the DotConfig command-line interface."""
    try:
        return cli()
    except Exception as e:
        log_error(e, "Error in CLI command")
        return 1

if __name__ == '__main__':
    sys.exit(main())
