"""Deterministic, cycle-safe text rendering of a dependency graph.

The output is for display only and is not meant to be parsed back.

Format
------
Each vertex is printed on its own line as ``<indent><type>:``; children
follow their parent in edge order, each level extending the indent by
one ``indent_unit``::

    mu/stack:
        -> aws/ec2/instance:
        -> aws/ec2/instance:
        -> aws/ec2/securityGroup: <cycle...>

A vertex reached a second time anywhere in the same render — through a
genuine cycle or through a second parent — prints as
``<indent><type>: <cycle...>`` and is not descended into again.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import Protocol

from mu_eval.core.protocols import Vertex

DEFAULT_INDENT_UNIT: str = "    -> "
CYCLE_MARKER: str = "<cycle...>"


class TextSink(Protocol):
    """Anything with a ``write(str)`` method (``sys.stdout``, ``StringIO``)."""

    def write(self, text: str, /) -> object:
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def render_vertex(
    vertex: Vertex,
    shown: set[int],
    sink: TextSink,
    *,
    indent: str = "",
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> None:
    """Write *vertex* and everything reachable from it to *sink*.

    *shown* holds the ``id()`` of every vertex already printed in full
    and is updated in place, so several roots can share one set.

    An explicit stack replaces recursion.  Children are pushed in reverse
    so they pop in edge order, which yields the same pre-order as a
    recursive walk.
    """
    stack: list[tuple[Vertex, str]] = [(vertex, indent)]
    while stack:
        current, prefix = stack.pop()
        label = current.type_label
        if id(current) in shown:
            sink.write(f"{prefix}{label}: {CYCLE_MARKER}\n")
            continue

        shown.add(id(current))
        sink.write(f"{prefix}{label}:\n")
        child_prefix = prefix + indent_unit
        for child in reversed(current.outs()):
            stack.append((child, child_prefix))


def render_graph(
    roots: Sequence[Vertex],
    sink: TextSink,
    *,
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> None:
    """Write every vertex reachable from *roots*, in root order, to *sink*.

    A fresh visited set is created for this call and discarded after it.
    An empty *roots* sequence writes nothing.
    """
    shown: set[int] = set()
    for root in roots:
        render_vertex(root, shown, sink, indent_unit=indent_unit)


def format_graph(
    roots: Sequence[Vertex],
    *,
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> str:
    """Return the text :func:`render_graph` would write for *roots*."""
    buffer = io.StringIO()
    render_graph(roots, buffer, indent_unit=indent_unit)
    return buffer.getvalue()
