#!/usr/bin/env python3
"""
Discourse Stats CLI.

Repository entry point, equivalent to the installed `discourse-stats`
command.

Usage:
    python cli.py --help
    python cli.py https://forum.example.com --all
    python cli.py forum.example.com --key topics_count
    python cli.py forum.example.com --debug
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from discourse_stats.cli import main

if __name__ == "__main__":
    main(prog_name="discourse-stats")
