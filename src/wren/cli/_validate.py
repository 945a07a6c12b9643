"""``wren validate``: validate an answers file against a form definition.

Prints ``{"valid": ..., "data": ..., "errors": ...}`` as JSON and exits
with code 1 when any field fails.
"""

import argparse
import json
import sys

from wren.cli._load import load_answers, load_definition
from wren.errors import CompilationError
from wren.validation.compiler import compile_form


def run_validate(args: argparse.Namespace) -> None:
    definition = load_definition(args.form)
    answers = load_answers(args.answers)

    try:
        validator = compile_form(definition)
    except CompilationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = validator.validate(answers)
    report = {"valid": result.is_valid, "data": result.data, "errors": result.errors}
    print(json.dumps(report, indent=2))
    if not result:
        raise SystemExit(1)
