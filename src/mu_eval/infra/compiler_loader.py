"""Infrastructure: compiler plugin discovery via package entry points.

The compiler that turns a blueprint into a graph is owned elsewhere and
installed as a plugin.  A plugin registers a zero-argument callable that
returns a :class:`~mu_eval.core.protocols.CompilerFactory`::

    [project.entry-points."mu_eval.compilers"]
    mu = "mu_compiler.plugin:CompilerFactory"

Every failure to resolve or import a plugin is re-raised as
:class:`~mu_eval.exceptions.CompilerUnavailableError`.
"""

from __future__ import annotations

from importlib.metadata import EntryPoint, entry_points
from pathlib import Path

from mu_eval.core.models import CompileOptions
from mu_eval.core.protocols import Compiler, CompilerFactory
from mu_eval.exceptions import CompilerUnavailableError

ENTRY_POINT_GROUP: str = "mu_eval.compilers"


def _installed() -> dict[str, EntryPoint]:
    return {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}


def available_compilers() -> list[str]:
    """Return the sorted names of every installed compiler plugin."""
    return sorted(_installed())


def _select(installed: dict[str, EntryPoint], name: str | None) -> EntryPoint:
    if not installed:
        raise CompilerUnavailableError(
            "No compiler plugin is installed.",
            hint=f"Install a package that registers a '{ENTRY_POINT_GROUP}' entry point.",
        )

    if name is None:
        if len(installed) > 1:
            names = ", ".join(sorted(installed))
            raise CompilerUnavailableError(
                f"Several compiler plugins are installed: {names}.",
                hint="Choose one with --compiler NAME.",
            )
        return next(iter(installed.values()))

    try:
        return installed[name]
    except KeyError:
        names = ", ".join(sorted(installed))
        raise CompilerUnavailableError(
            f"Unknown compiler plugin {name!r}.",
            hint=f"Installed plugins: {names}.",
        ) from None


def load_compiler_factory(name: str | None = None) -> CompilerFactory:
    """Load and instantiate a compiler factory.

    Parameters
    ----------
    name:
        Entry-point name of the plugin.  May be omitted when exactly one
        plugin is installed.

    Raises
    ------
    CompilerUnavailableError
        When no plugin matches, the choice is ambiguous, or the plugin
        fails to import or instantiate.
    """
    entry_point = _select(_installed(), name)
    try:
        factory_type = entry_point.load()
        return factory_type()
    except Exception as exc:
        raise CompilerUnavailableError(
            f"Compiler plugin {entry_point.name!r} failed to load: {exc}",
        ) from exc


class LazyCompilerFactory:
    """A :class:`CompilerFactory` that resolves its plugin on first use.

    Entrypoint arguments are bound and the package is resolved before a
    compiler is created, so a missing plugin never masks a parse error
    or turns an unresolved package into a failure.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name: str | None = name
        self._factory: CompilerFactory | None = None

    def _resolve(self) -> CompilerFactory:
        if self._factory is None:
            self._factory = load_compiler_factory(self._name)
        return self._factory

    def new_wd(self, options: CompileOptions) -> Compiler:
        return self._resolve().new_wd(options)

    def new(self, base_dir: Path, options: CompileOptions) -> Compiler:
        return self._resolve().new(base_dir, options)
