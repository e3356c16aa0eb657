"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or plugin I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from mu_eval.core.arg_binder import bind_args
from mu_eval.core.evaluate_service import EvaluateService
from mu_eval.core.graph_renderer import format_graph, render_graph
from mu_eval.core.models import (
    ArgValue,
    BoolArg,
    CompileOptions,
    DependencyGraph,
    EntrypointArgs,
    Node,
    Package,
    StringArg,
)
from mu_eval.core.protocols import Compiler, CompilerFactory, Graph, PackageSource, Vertex

__all__: list[str] = [
    "ArgValue",
    "BoolArg",
    "CompileOptions",
    "Compiler",
    "CompilerFactory",
    "DependencyGraph",
    "EntrypointArgs",
    "EvaluateService",
    "Graph",
    "Node",
    "Package",
    "PackageSource",
    "StringArg",
    "Vertex",
    "bind_args",
    "format_graph",
    "render_graph",
]
