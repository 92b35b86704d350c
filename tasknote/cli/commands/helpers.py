"""Shared helper functions for CLI commands."""

import argparse
import json
from typing import Any

from tasknote.types import TodoResult


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    print(json.dumps(data, indent=2, default=str))


def uint_arg(value: str) -> int:
    """argparse type for non-negative integers."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got '{value}'")
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got {ivalue}")
    return ivalue


def emit_result(result: TodoResult, as_json: bool) -> int:
    """Print a handler result and return the exit status."""
    if as_json:
        print_json(result.to_dict())
    elif result.is_ok:
        print(result.value)
    else:
        print(f"✗ {result.value}")
    return 0 if result.is_ok else 1
