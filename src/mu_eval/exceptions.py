"""Custom exception hierarchy for mu-eval.

All exceptions that cross layer boundaries must inherit from
:class:`MuEvalError`.  Raw third-party or OS exceptions (e.g. from PyYAML,
the filesystem, or a compiler plugin) must NEVER propagate beyond the
layer that produced them — they must be caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
MuEvalError
├── ArgParseError
├── PackageReadError
├── CompilerError
├── CompilerUnavailableError
└── EnvironmentError
"""

from __future__ import annotations


class MuEvalError(Exception):
    """Base exception for all mu-eval errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Entrypoint arguments --------------------------------------------------

class ArgParseError(MuEvalError):
    """Raised when a token after ``--`` cannot be bound to a key."""

    def __init__(
        self,
        message: str,
        *,
        token: str,
        index: int,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.token: str = token
        """The offending token, verbatim."""
        self.index: int = index
        """Zero-based position of the token in the argument sequence."""


# --- Package loading -------------------------------------------------------

class PackageReadError(MuEvalError):
    """Raised when a package manifest exists but cannot be loaded."""


# --- Compilation -----------------------------------------------------------

class CompilerError(MuEvalError):
    """Raised when the compiler cannot be created or fails to compile."""


class CompilerUnavailableError(MuEvalError):
    """Raised when no usable compiler plugin can be resolved."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(MuEvalError):
    """Raised when a required runtime dependency is not available."""
