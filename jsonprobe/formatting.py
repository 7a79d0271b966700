"""
Formatting helpers for diagnostics.

Failure messages embed documents formatted by these helpers. The Dumper
writes documents to a rich console and can be swapped out in tests.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from rich.console import Console

# Signature of a document formatter used in failure messages
Formatter = Callable[[Any], str]


def format_document(document: Any, indent: int = 2) -> str:
    """Pretty-print a document as indented JSON, falling back to repr."""
    try:
        return json.dumps(document, indent=indent, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(document)


def format_value(value: Any, max_length: int = 100) -> str:
    """Format a value for display, truncating if too long."""
    if value is None:
        return "null"

    if isinstance(value, str):
        formatted = repr(value)
    elif isinstance(value, (list, dict)):
        try:
            formatted = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            formatted = repr(value)
    else:
        formatted = repr(value)

    if len(formatted) > max_length:
        return formatted[: max_length - 3] + "..."

    return formatted


class Dumper:
    """
    Writes documents or raw text for human inspection.

    Example:
        dumper = Dumper()
        dumper.dump({"data": {"foo": "bar"}})

        # Capture output in tests
        dumper = Dumper(Console(record=True))
    """

    def __init__(self, console: Console | None = None, indent: int = 2):
        self.console = console or Console()
        self.indent = indent

    def dump(self, content: Any) -> None:
        if isinstance(content, (dict, list)):
            self.console.print_json(data=content, indent=self.indent)
        else:
            self.console.print(str(content), markup=False, highlight=False)
