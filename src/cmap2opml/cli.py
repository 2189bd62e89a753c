"""
cmap2opml.cli - Command-line interface.

Main entry point for the cmap2opml CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cmap2opml import __version__
from cmap2opml.commands import convert, init, roots


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmap2opml",
        description="Convert CmapTools concept maps (CXL) into OPML outlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cmap2opml convert plants.cxl              # Outline rooted at the detected root
  cmap2opml convert plants.cxl --root 1JX   # Outline rooted at concept 1JX
  cmap2opml convert plants.cxl --all        # One outline per concept
  cmap2opml roots plants.cxl                # Show root candidates

Configuration:
  cmap2opml init                            # Create .cmap2opml.toml here

For detailed command help: cmap2opml <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"cmap2opml {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a CXL concept map to OPML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cmap2opml convert map.cxl                     # Writes map.opml
  cmap2opml convert map.cxl -o outline.opml     # Explicit output file
  cmap2opml convert map.cxl --root 1JX          # Root at a specific concept
  cmap2opml convert map.cxl --all -d outlines/  # One file per concept

Root detection (when --root is not given or not found):
  concepts that are never a connection target are candidates; a label
  containing "root", "main" or "center" wins, else the first candidate.
""",
    )
    convert_parser.add_argument(
        "input",
        type=Path,
        help="CXL file to convert",
    )
    convert_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output OPML file (default: input name with .opml)",
        metavar="PATH",
    )
    convert_parser.add_argument(
        "--root",
        help="Concept id to root the outline at",
        metavar="ID",
    )
    convert_parser.add_argument(
        "--all",
        action="store_true",
        help="Write one outline per concept",
    )
    convert_parser.add_argument(
        "-d",
        "--output-dir",
        type=Path,
        help="Directory for --all output (default: <input>_concepts/)",
        metavar="DIR",
    )
    convert_parser.add_argument(
        "--title",
        help="Outline title (default: map title)",
    )

    # roots command
    roots_parser = subparsers.add_parser(
        "roots",
        help="List root candidates of a concept map",
    )
    roots_parser.add_argument(
        "input",
        type=Path,
        help="CXL file to inspect",
    )
    roots_parser.add_argument(
        "-j",
        "--json",
        dest="json_output",
        action="store_true",
        help="Output JSON",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create .cmap2opml.toml configuration",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing configuration",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Generate shell tab-completion scripts",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Shell type (auto-detected if not specified)",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library log records to stderr at the requested verbosity."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install cmap2opml[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose, args.quiet)

    try:
        # Dispatch to command handlers
        if args.command == "convert":
            return convert.run(args)
        elif args.command == "roots":
            return roots.run(args)
        elif args.command == "init":
            return init.run(args)
        elif args.command == "completion":
            return completion_command(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def completion_command(args: argparse.Namespace) -> int:
    """Handle completion command - generate shell completion scripts."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install cmap2opml[completion]", file=sys.stderr)
        return 1

    shell = args.shell

    if shell:
        import subprocess

        cmd = ["register-python-argcomplete"]
        if shell in ("fish", "tcsh"):
            cmd.append(f"--shell={shell}")
        cmd.append("cmap2opml")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            print("Error: register-python-argcomplete not found.", file=sys.stderr)
            print("Make sure argcomplete is properly installed.", file=sys.stderr)
            return 1
        if result.returncode != 0:
            print(f"Error generating completion script: {result.stderr}", file=sys.stderr)
            return 1
        print(result.stdout)
    else:
        print("""
Shell Completion Setup for cmap2opml
====================================

Bash (add to ~/.bashrc):
  eval "$(register-python-argcomplete cmap2opml)"

Zsh (add to ~/.zshrc):
  autoload -U bashcompinit
  bashcompinit
  eval "$(register-python-argcomplete cmap2opml)"

Fish (add to ~/.config/fish/config.fish):
  register-python-argcomplete --shell fish cmap2opml | source

Tcsh (add to ~/.tcshrc):
  eval `register-python-argcomplete --shell tcsh cmap2opml`

Generate script for a specific shell:
  cmap2opml completion --shell bash
  cmap2opml completion --shell zsh
  cmap2opml completion --shell fish
  cmap2opml completion --shell tcsh

After adding the line, restart your shell or source the config file.
""")

    return 0


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"cmap2opml {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
