"""Shared pytest fixtures and configuration for the mu-eval test suite.

Guidelines
----------
* No real compiler plugin is required — compilers are faked at the
  :class:`~mu_eval.core.protocols.CompilerFactory` boundary.
* Core tests must be pure — no side effects.
* Filesystem tests use ``tmp_path`` only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from mu_eval.core.models import CompileOptions, DependencyGraph, Node, Package


@dataclass
class FakeCompiler:
    """Records how it was created and returns a canned graph."""

    graph: DependencyGraph | None
    options: CompileOptions
    base_dir: Path | None = None
    compiled: list[Package | None] = field(default_factory=list)
    error: Exception | None = None

    def compile(self) -> DependencyGraph | None:
        self.compiled.append(None)
        if self.error is not None:
            raise self.error
        return self.graph

    def compile_package(self, package: Package) -> DependencyGraph | None:
        self.compiled.append(package)
        if self.error is not None:
            raise self.error
        return self.graph


@dataclass
class FakeCompilerFactory:
    """A :class:`CompilerFactory` handing out :class:`FakeCompiler` instances."""

    graph: DependencyGraph | None = None
    compile_error: Exception | None = None
    create_error: Exception | None = None
    created: list[FakeCompiler] = field(default_factory=list)

    def new_wd(self, options: CompileOptions) -> FakeCompiler:
        return self._make(options, None)

    def new(self, base_dir: Path, options: CompileOptions) -> FakeCompiler:
        return self._make(options, base_dir)

    def _make(self, options: CompileOptions, base_dir: Path | None) -> FakeCompiler:
        if self.create_error is not None:
            raise self.create_error
        compiler = FakeCompiler(
            graph=self.graph,
            options=options,
            base_dir=base_dir,
            error=self.compile_error,
        )
        self.created.append(compiler)
        return compiler


@pytest.fixture
def stack_graph() -> DependencyGraph:
    """A small stack: one root, two services sharing a security group."""
    stack = Node("mu/stack")
    web = stack.add_edge(Node("aws/ec2/instance"))
    worker = stack.add_edge(Node("aws/ec2/instance"))
    group = Node("aws/ec2/securityGroup")
    web.add_edge(group)
    worker.add_edge(group)
    return DependencyGraph(root_nodes=(stack,))


@pytest.fixture
def fake_factory(stack_graph: DependencyGraph) -> FakeCompilerFactory:
    return FakeCompilerFactory(graph=stack_graph)


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """A directory holding a minimal YAML package manifest."""
    (tmp_path / "Mu.yaml").write_text("name: webapp\nmain: index.ts\n", encoding="utf-8")
    return tmp_path
