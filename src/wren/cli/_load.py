"""Shared file loading for CLI commands."""

import json
import sys
from pathlib import Path
from typing import Any

from wren.codec import load_path
from wren.definition import FormDefinition
from wren.errors import DefinitionError


def load_definition(path: str) -> FormDefinition:
    """Load a definition, exiting with code 1 on a missing or malformed file."""
    try:
        return load_path(path)
    except (OSError, DefinitionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def load_answers(path: str) -> dict[str, Any]:
    """Load a JSON object of raw answers, exiting with code 1 on failure."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    if not isinstance(data, dict):
        print("Error: answers must be a JSON object", file=sys.stderr)
        raise SystemExit(1)
    return data
