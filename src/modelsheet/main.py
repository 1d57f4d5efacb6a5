"""Subcommand dispatcher for modelsheet.

Usage:
    modelsheet build  renders/eric [--config sheet.yaml]
    modelsheet plan   renders/eric [--config sheet.yaml]
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="modelsheet",
        description="Character model sheets from folders of PNG renders.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("build", help="Build and save a model sheet")
    subparsers.add_parser("plan", help="Preview the layout without rendering")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    known_commands = {"build", "plan"}
    if parsed.command not in known_commands:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "build":
        from .cli import main as build_main
        build_main(remaining)
    elif parsed.command == "plan":
        from .plan_cli import main as plan_main
        plan_main(remaining)


if __name__ == "__main__":
    main()
