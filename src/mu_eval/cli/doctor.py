"""``mu-eval doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can evaluate packages: a supported
Python, a YAML parser for manifests, and at least one compiler plugin.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from mu_eval.cli import exit_codes
from mu_eval.cli.console import console
from mu_eval.infra.compiler_loader import ENTRY_POINT_GROUP, available_compilers
from mu_eval.version import __version__

Check = tuple[str, str, str]
"""(label, value, status) row; status carries Rich markup."""

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _mueval_version_check() -> Check:
    return "mu-eval", __version__, _OK


def _python_version_check() -> Check:
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _yaml_check() -> Check:
    """YAML manifests cannot be read without PyYAML."""
    try:
        import yaml
    except ImportError:
        return "PyYAML", "NOT INSTALLED", "[red]FAIL[/red]"
    return "PyYAML", getattr(yaml, "__version__", "unknown"), _OK


def _compiler_check() -> Check:
    """A missing plugin is a warning: ``doctor`` itself still works."""
    names = available_compilers()
    if not names:
        return "compilers", "none installed", _WARN
    return "compilers", ", ".join(names), _OK


def _os_check() -> Check:
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def collect_checks() -> list[Check]:
    """Run every collector, in display order."""
    return [
        _mueval_version_check(),
        _python_version_check(),
        _yaml_check(),
        _compiler_check(),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nmu-eval doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[Check]) -> bool:
    """Render doctor output with Rich; return ``False`` if Rich is missing."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(
        title="mu-eval doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()
    return True


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    if not _print_rich_table(checks):
        _print_plain_table(checks)

    if not available_compilers():
        console.print("[yellow]No compiler plugin is installed.[/yellow]")
        console.print(
            f"Install a package registering a '{ENTRY_POINT_GROUP}' entry point "
            "to evaluate packages.\n"
        )

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
