"""Allow ``python -m mu_eval`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m mu_eval`` behaves identically to the ``mu-eval``
console script.
"""

from __future__ import annotations

from mu_eval.cli.app import cli

if __name__ == "__main__":
    cli()
