"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, PyYAML, and
compiler plugins.  Every raw third-party exception must be caught here
and re-raised as a :class:`~mu_eval.exceptions.MuEvalError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from mu_eval.infra.compiler_loader import (
    LazyCompilerFactory,
    available_compilers,
    load_compiler_factory,
)
from mu_eval.infra.package_reader import ManifestPackageReader, read_package_from_arg

__all__: list[str] = [
    "LazyCompilerFactory",
    "ManifestPackageReader",
    "available_compilers",
    "load_compiler_factory",
    "read_package_from_arg",
]
