"""Protocols (interfaces) consumed by the core layer.

These define the contracts that compiler plugins and infrastructure
adapters must satisfy.  Core code depends ONLY on these protocols —
never on a concrete graph or compiler implementation — preserving the
dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from mu_eval.core.models import CompileOptions, Package


class Vertex(Protocol):
    """A node in a compiled dependency graph.

    The renderer needs exactly two capabilities: a type label and the
    ordered outgoing edges.  Identity is by object reference.
    """

    @property
    def type_label(self) -> str:
        """Opaque type identifier of the resource this vertex represents."""
        ...  # pragma: no cover

    def outs(self) -> Sequence[Vertex]:
        """Return outgoing edges in a stable, deterministic order."""
        ...  # pragma: no cover


class Graph(Protocol):
    """A compiled dependency graph exposing its traversal entry points."""

    def roots(self) -> Sequence[Vertex]:
        """Return root vertices in a stable, deterministic order."""
        ...  # pragma: no cover


class Compiler(Protocol):
    """A compiler bound to a workspace and a set of compile options."""

    def compile(self) -> Graph | None:
        """Compile the workspace's default package.

        Returns ``None`` when there is nothing to compile.
        """
        ...  # pragma: no cover

    def compile_package(self, package: Package) -> Graph | None:
        """Compile an already-loaded *package*."""
        ...  # pragma: no cover


class CompilerFactory(Protocol):
    """Creates compilers; registered by plugins as an entry point.

    Implementations may raise any exception on failure; the core layer
    wraps non-mu-eval errors in
    :class:`~mu_eval.exceptions.CompilerError`.
    """

    def new_wd(self, options: CompileOptions) -> Compiler:
        """Create a compiler rooted at the current working directory."""
        ...  # pragma: no cover

    def new(self, base_dir: Path, options: CompileOptions) -> Compiler:
        """Create a compiler rooted at *base_dir*."""
        ...  # pragma: no cover


class PackageSource(Protocol):
    """Resolves the package argument given on the command line."""

    def read_package(self, arg: str) -> Package | None:
        """Load the package named by *arg*.

        ``"-"`` designates the default package of the current working
        directory.  Returns ``None`` when no package can be resolved.

        Raises
        ------
        PackageReadError
            When a manifest exists but cannot be loaded.
        """
        ...  # pragma: no cover
