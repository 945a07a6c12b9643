"""``wren check``: definition lint and compilation command.

Loads a form definition, reports save-time problems (blank labels,
choice fields without options) and compilation errors, and exits with
code 1 if anything is wrong.
"""

import argparse
import sys

from wren.cli._load import load_definition
from wren.definition import lint_definition
from wren.errors import CompilationError
from wren.validation.compiler import compile_form


def run_check(args: argparse.Namespace) -> None:
    """Lint and compile ``args.form``, printing a summary to stdout."""
    definition = load_definition(args.form)

    failed = False
    for field_id, message in lint_definition(definition).items():
        print(f"  {field_id}: {message}")
        failed = True

    try:
        validator = compile_form(definition)
    except CompilationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if failed:
        raise SystemExit(1)
    print(f"{definition.name}: {len(validator)} fields OK")
