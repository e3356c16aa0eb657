"""Core evaluate service — binds arguments, loads, and compiles a package.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~mu_eval.core.protocols.CompilerFactory` and a
:class:`~mu_eval.core.protocols.PackageSource` injected at construction
time (dependency inversion), keeping the core free of any plugin or
filesystem imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct filesystem access.
* Only :class:`~mu_eval.exceptions.MuEvalError` subclasses escape.
* A ``None`` return means "nothing to render", never an error.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import TypeVar

from mu_eval.core.arg_binder import bind_args
from mu_eval.core.models import CompileOptions, Package, default_options
from mu_eval.core.protocols import Compiler, CompilerFactory, Graph, PackageSource
from mu_eval.exceptions import CompilerError, MuEvalError

_T = TypeVar("_T")

DEFAULT_PACKAGE_ARG: str = "-"
"""Package argument meaning "the default package of the working directory"."""


class EvaluateService:
    """Stateless service that turns CLI input into a compiled graph.

    Parameters
    ----------
    factory:
        Any object satisfying the :class:`CompilerFactory` protocol.
    packages:
        Any object satisfying the :class:`PackageSource` protocol.
    """

    def __init__(self, factory: CompilerFactory, packages: PackageSource) -> None:
        self._factory: CompilerFactory = factory
        self._packages: PackageSource = packages

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def build_options(pack_args: Sequence[str] | None) -> CompileOptions:
        """Bind *pack_args* into fresh :class:`CompileOptions`.

        Raises
        ------
        ArgParseError
            If an entrypoint argument token is malformed.
        """
        return replace(default_options(), args=bind_args(pack_args or ()))

    def evaluate(
        self,
        target: str | None,
        pack_args: Sequence[str] | None = None,
    ) -> Graph | None:
        """Compile *target* (or the working directory) into a graph.

        Parameters
        ----------
        target:
            ``None`` to compile the default workspace, ``"-"`` for the
            default package, or a path to a package manifest/directory.
        pack_args:
            Tokens that followed ``--`` on the command line.

        Raises
        ------
        ArgParseError
            If an entrypoint argument token is malformed.
        PackageReadError
            If the package manifest exists but cannot be loaded.
        CompilerError
            If the compiler cannot be created or compilation fails.
        """
        options = self.build_options(pack_args)

        if target is None:
            compiler = self._create(lambda: self._factory.new_wd(options))
            return self._guard("Compilation failed", compiler.compile)

        package = self._packages.read_package(target)
        if package is None:
            return None

        return self._compile_package(target, package, options)

    # ------------------------------------------------------------------
    # Compiler delegation (safe boundary)
    # ------------------------------------------------------------------

    def _compile_package(
        self,
        target: str,
        package: Package,
        options: CompileOptions,
    ) -> Graph | None:
        if target == DEFAULT_PACKAGE_ARG:
            compiler = self._create(lambda: self._factory.new_wd(options))
        else:
            compiler = self._create(lambda: self._factory.new(package.base_dir, options))
        return self._guard(
            f"Compilation of package {package.name!r} failed",
            lambda: compiler.compile_package(package),
        )

    def _create(self, make: Callable[[], Compiler]) -> Compiler:
        return self._guard("Could not create a compiler", make)

    @staticmethod
    def _guard(context: str, call: Callable[[], _T]) -> _T:
        """Run *call* and ensure only our exceptions escape."""
        try:
            return call()
        except MuEvalError:
            # Already one of ours; propagate unchanged.
            raise
        except Exception as exc:
            raise CompilerError(f"{context}: {exc}") from exc
