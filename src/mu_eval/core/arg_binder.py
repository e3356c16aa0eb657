"""Pure binding of trailing ``--`` tokens into entrypoint arguments.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Binding rules (applied left to right, one key per step):

1. Strip one or two leading ``-`` characters to get the candidate key.
2. ``key=value`` — store ``value`` verbatim as a string.
3. ``key value`` — when the next token does not start with ``-``,
   consume it as the string value.
4. ``no-key`` — store ``False`` under ``key``.
5. ``key`` — store ``True``.

Later occurrences of a key overwrite earlier ones.
"""

from __future__ import annotations

from collections.abc import Sequence

from mu_eval.core.models import ArgValue, BoolArg, EntrypointArgs, StringArg
from mu_eval.exceptions import ArgParseError

_NEGATION_PREFIX = "no-"


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------

def strip_dashes(token: str) -> str:
    """Remove at most two leading ``-`` characters from *token*."""
    for _ in range(2):
        if token.startswith("-"):
            token = token[1:]
    return token


def _is_value_token(token: str) -> bool:
    """Return whether *token* can be consumed as a preceding key's value."""
    return not token.startswith("-")


def _reject(token: str, index: int, reason: str) -> ArgParseError:
    return ArgParseError(
        f"Cannot bind entrypoint argument {token!r} at position {index}: {reason}.",
        token=token,
        index=index,
        hint="Entrypoint arguments look like --key=value, --key value, --flag or --no-flag.",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def bind_args(tokens: Sequence[str]) -> EntrypointArgs:
    """Bind *tokens* (everything after ``--``) into :class:`EntrypointArgs`.

    Raises
    ------
    ArgParseError
        If a token is empty, a bare ``-``/``--``, or yields an empty key.
    """
    mapped: dict[str, ArgValue] = {}

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not token:
            raise _reject(token, i, "empty token")

        key = strip_dashes(token)
        if not key:
            raise _reject(token, i, "no key after leading dashes")

        if "=" in key:
            name, _, value = key.partition("=")
            if not name:
                raise _reject(token, i, "empty key before '='")
            mapped[name] = StringArg(value)
        elif i + 1 < len(tokens) and _is_value_token(tokens[i + 1]):
            mapped[key] = StringArg(tokens[i + 1])
            i += 1
        elif key.startswith(_NEGATION_PREFIX):
            name = key[len(_NEGATION_PREFIX):]
            if not name:
                raise _reject(token, i, "empty key after 'no-'")
            mapped[name] = BoolArg(False)
        else:
            mapped[key] = BoolArg(True)

        i += 1

    return EntrypointArgs(mapped)
