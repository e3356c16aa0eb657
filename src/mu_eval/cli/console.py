"""CLI console helpers with optional Rich support.

Diagnostics (errors, hints, the doctor table) go to stderr through
:data:`console`.  Graph output is plain text on stdout and never passes
through Rich, so markup-like text in type labels is printed verbatim.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
keep working when it is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from mu_eval.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?(?:bold|dim|red|green|yellow|cyan| )+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, highlight=False)


def escape_markup(text: str) -> str:
    """Escape *text* so Rich prints it literally.

    Messages often embed user paths or type labels such as
    ``aws:ec2/instance[main]`` which Rich would otherwise parse as tags.
    """
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


def strip_markup(text: str) -> str:
    """Drop simple Rich style tags for the plain-text fallback."""
    return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain stderr fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(
                *(strip_markup(obj) if isinstance(obj, str) else obj for obj in objects),
                file=sys.stderr,
            )
            return
        rich_console.print(*objects)

    def error(self, message: str, hint: str | None = None) -> None:
        """Print an ``Error:`` line and an optional ``Hint:`` line."""
        self.print(f"[bold red]Error:[/bold red] {escape_markup(message)}")
        if hint:
            self.print(f"[yellow]Hint:[/yellow] {escape_markup(hint)}")


console = _ConsoleProxy()
