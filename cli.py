#!/usr/bin/env python3
"""
Entry point for the DotConfig CLI.
This allows running the CLI directly with `python cli.py`.
"""
import sys

from DotConfig.cli.commands import main

if __name__ == '__main__':
    sys.exit(main())
