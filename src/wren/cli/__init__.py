"""Wren CLI: check form definitions and validate answer files.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Compile form definitions and validate submitted answers.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log compiler and cache activity to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Lint and compile a form definition")
    check_parser.add_argument("form", help="Path to a form definition JSON file")

    # -- wren validate ----------------------------------------------------
    validate_parser = subparsers.add_parser("validate", help="Validate answers against a form")
    validate_parser.add_argument("form", help="Path to a form definition JSON file")
    validate_parser.add_argument("answers", help="Path to a JSON object of answers by field id")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from wren.cli._check import run_check

        run_check(args)
    elif args.command == "validate":
        from wren.cli._validate import run_validate

        run_validate(args)
