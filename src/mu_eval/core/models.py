"""Domain models for mu-eval.

Value objects are **frozen** dataclasses with no I/O and no dependencies
on external packages.  The one exception is :class:`Node`, the reference
graph vertex, whose identity is by object reference rather than by value.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# Entrypoint argument values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoolArg:
    """A flag-style entrypoint argument (``--verbose``, ``--no-debug``)."""

    value: bool


@dataclass(frozen=True, slots=True)
class StringArg:
    """A valued entrypoint argument (``--name=foo``, ``--name foo``).

    Values are never coerced: ``--count 3`` binds the string ``"3"``.
    """

    value: str


ArgValue = BoolArg | StringArg
"""Tagged variant of exactly the two kinds an entrypoint argument may take."""


# ---------------------------------------------------------------------------
# Entrypoint argument mapping
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EntrypointArgs(Mapping[str, ArgValue]):
    """Immutable name → :data:`ArgValue` mapping handed to the compiler.

    Behaves as a read-only :class:`~collections.abc.Mapping`; use
    :meth:`to_plain` when a compiler wants native ``bool | str`` values.
    """

    values: Mapping[str, ArgValue] = field(default_factory=dict)

    def __getitem__(self, key: str) -> ArgValue:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def to_plain(self) -> dict[str, bool | str]:
        """Unwrap every value into its native Python type."""
        return {key: arg.value for key, arg in self.values.items()}


# ---------------------------------------------------------------------------
# Compiler options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Settings passed to a compiler factory when creating a compiler."""

    args: EntrypointArgs = field(default_factory=EntrypointArgs)
    """Arguments bound to the package's main entrypoint function."""


def default_options() -> CompileOptions:
    """Return compile options with no entrypoint arguments."""
    return CompileOptions()


# ---------------------------------------------------------------------------
# Blueprint package
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Package:
    """A blueprint package manifest loaded from disk."""

    name: str
    """Package name from the manifest, or its directory name."""

    path: Path
    """Absolute path of the manifest file."""

    base_dir: Path
    """Directory the compiler should be rooted at."""

    document: Mapping[str, Any]
    """The raw manifest mapping, uninterpreted."""


# ---------------------------------------------------------------------------
# Reference graph implementation
# ---------------------------------------------------------------------------

@dataclass(eq=False, slots=True)
class Node:
    """A graph vertex that compares by identity.

    Two nodes with the same type label and edges are still distinct
    vertices unless they are the same object.
    """

    type_label: str
    edges: list[Node] = field(default_factory=list)

    def outs(self) -> Sequence[Node]:
        return self.edges

    def add_edge(self, target: Node) -> Node:
        """Append an outgoing edge to *target* and return *target*."""
        self.edges.append(target)
        return target


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """An ordered set of root vertices."""

    root_nodes: tuple[Node, ...] = ()

    def roots(self) -> Sequence[Node]:
        return self.root_nodes
