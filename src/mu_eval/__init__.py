"""mu-eval — evaluate a Mu blueprint package and print its resource graph.

Binds trailing ``--`` arguments into entrypoint configuration, hands them
to a pluggable compiler, and renders the resulting dependency graph as an
indented text tree.
"""

from mu_eval.version import __version__

__all__: list[str] = ["__version__"]
