"""CLI application entry point and command routing for mu-eval.

This module is the **sole error boundary** for the entire application.
It catches :class:`~mu_eval.exceptions.MuEvalError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Diagnostics go to stderr via the console proxy; only the rendered graph
  is written to stdout.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from mu_eval.cli import exit_codes
from mu_eval.cli.console import console, escape_markup
from mu_eval.exceptions import MuEvalError
from mu_eval.version import __version__

DASHDASH: str = "--"

_EVAL_DESCRIPTION = """\
Evaluate a Mu blueprint package and print its resource graph.

The graph is a directed graph of the resources a deployment operation such
as plan or apply would touch.  Evaluation does not change the target
environment.

By default the package is loaded from the current directory.  A path to a
package manifest or directory elsewhere may be given as PACKAGE, and '-'
names the default package of the current directory.  Tokens after '--' are
bound as arguments of the package's main entrypoint:

  --key=value   --key value   --flag   --no-flag
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def split_dashdash(argv: Sequence[str]) -> tuple[list[str], list[str] | None]:
    """Split *argv* at the first ``--``.

    Returns the tokens before it, and the tokens after it or ``None`` when
    no ``--`` is present.
    """
    tokens = list(argv)
    if DASHDASH not in tokens:
        return tokens, None
    at = tokens.index(DASHDASH)
    return tokens[:at], tokens[at + 1:]


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``mu-eval eval [--compiler NAME] [PACKAGE] [-- ARGS...]``
    * ``mu-eval doctor``
    * ``mu-eval --version``
    """
    parser = argparse.ArgumentParser(
        prog="mu-eval",
        description="Evaluate Mu blueprint packages into resource graphs.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    eval_parser = commands.add_parser(
        "eval",
        help="Evaluate a package and print its resource graph.",
        description=_EVAL_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage="%(prog)s [-h] [--compiler NAME] [PACKAGE] [-- ARGS...]",
    )
    eval_parser.add_argument(
        "package",
        nargs="?",
        default=None,
        help="Package manifest or directory, or '-' for the current directory's package.",
    )
    eval_parser.add_argument(
        "--compiler",
        metavar="NAME",
        default=None,
        help="Compiler plugin to use when more than one is installed.",
    )

    commands.add_parser("doctor", help="Check the runtime environment.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_eval(
    package: str | None,
    compiler_name: str | None,
    pack_args: list[str] | None,
) -> int:
    """Dispatch a package evaluation.

    Flow:
    1. Bind entrypoint arguments and load the package.
    2. Resolve the compiler plugin only once there is something to compile.
    3. Render the graph to stdout; print nothing when there is no graph.
    """
    from mu_eval.core.evaluate_service import EvaluateService
    from mu_eval.core.graph_renderer import render_graph
    from mu_eval.infra.compiler_loader import LazyCompilerFactory
    from mu_eval.infra.package_reader import ManifestPackageReader

    service = EvaluateService(LazyCompilerFactory(compiler_name), ManifestPackageReader())

    graph = service.evaluate(package, pack_args)
    if graph is None:
        return exit_codes.SUCCESS

    render_graph(graph.roots(), sys.stdout)
    sys.stdout.flush()
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from mu_eval.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the mu-eval CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    cli_args, pack_args = split_dashdash(sys.argv[1:] if argv is None else argv)

    parser = _build_parser()
    args = parser.parse_args(cli_args)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_eval(args.package, args.compiler, pack_args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except MuEvalError as exc:
        console.error(str(exc), exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
