#!/usr/bin/env python3
"""
Main entry point for the DotConfig package when run as a module.

This module provides the entry point for running the DotConfig package as a
module using `python -m DotConfig`. It delegates to the CLI's main function.

Example:
    $ python -m DotConfig show settings.yml --format json
    $ python -m DotConfig get settings.yml database.port --type int
    $ python -m DotConfig merge defaults.yml production.yml
"""

import sys

def main():
    """Main entry point for the DotConfig package."""
    from DotConfig.cli.commands import main as cli_main
    return cli_main()

if __name__ == "__main__":
    sys.exit(main())
