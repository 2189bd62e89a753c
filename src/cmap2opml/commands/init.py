"""
cmap2opml.commands.init - Create a .cmap2opml.toml configuration file.
"""

import argparse
import sys
from pathlib import Path

import tomlkit

from cmap2opml.config.defaults import CONFIG_FILENAME
from cmap2opml.config.loader import default_config_document


def run(args: argparse.Namespace) -> int:
    """Run the init command."""
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not getattr(args, "force", False):
        print(f"Configuration file already exists: {config_path}", file=sys.stderr)
        print("Use --force to overwrite.", file=sys.stderr)
        return 1

    config_path.write_text(tomlkit.dumps(default_config_document()), encoding="utf-8")
    print(f"Created configuration file: {config_path}")
    return 0
