# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for github-me.

Running `github-me` with no arguments runs the full release with built-in
defaults. The subcommands exist for the pieces you sometimes want on their
own.

Usage:
    github-me
    github-me release --dry-run
    github-me clean
    github-me verify --config release.yaml
    github-me info
"""

import argparse
import sys
from typing import Optional, Sequence

from github_me.cli.commands import handle_clean, handle_info, handle_release, handle_verify


def _build_global_parser(inherit_root: bool = False) -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so the help text doesn't collide between the parent and
    the subcommand parsers that inherit from it.

    With inherit_root=True every default is SUPPRESS, so a subcommand parser
    only sets an option the user typed after the subcommand and leaves values
    read by the root parser (`github-me --dry-run release`) alone.
    """
    parent = argparse.ArgumentParser(add_help=False)
    suppress = argparse.SUPPRESS
    parent.add_argument(
        "--config",
        type=str,
        default=suppress if inherit_root else None,
        help="Path to a YAML configuration file (defaults are used without one).",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=suppress if inherit_root else None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the logging verbosity level from config.",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=suppress if inherit_root else False,
        dest="dry_run",
        help="Log what would be done without running any tool or touching any file.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    commands = [
        ("release", "Compile, validate, and stage every Lambda archive (default).", handle_release),
        ("clean", "Remove staged archives from a previous release.", handle_clean),
        ("verify", "Check the staged archives against the build output.", handle_verify),
        ("info", "Display environment and release layout.", handle_info),
    ]

    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler)


def build_parser() -> argparse.ArgumentParser:
    root_parser = argparse.ArgumentParser(
        prog="github-me",
        description="Build and package the github-me Lambda functions.",
        parents=[_build_global_parser()],
    )
    root_parser.set_defaults(func=handle_release)
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, _build_global_parser(inherit_root=True))
    return root_parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main CLI entrypoint, referenced by [project.scripts] in pyproject.toml.

    Parses the command line, runs the chosen handler (release when no
    subcommand is given) and exits with its return code.
    """
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
