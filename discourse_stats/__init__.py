"""
Discourse Stats.

Command-line client that fetches a Discourse forum's /site/statistics.json
once and prints its numeric statistics.

Usage:
    discourse-stats forum.example.com --all
    discourse-stats forum.example.com --key topics_count
    discourse-stats forum.example.com          # interactive menu
"""

__version__ = "1.0.0"
