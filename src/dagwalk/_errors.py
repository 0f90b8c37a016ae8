"""Exceptions raised while resolving dependency graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence


class DependencyGraphError(Exception):
    """Base class for failures reported by a dependency traversal."""


class CycleDetectedError(DependencyGraphError):
    """A node transitively depends on itself.

    Attributes:
        node: The node whose dependency closes the cycle.
        dependency: The dependency of ``node`` that was still being resolved.
        path: The cycle, starting and ending with ``dependency``. When unknown,
            only the offending edge ``(node, dependency)``.

    """

    def __init__(self, node: Hashable, dependency: Hashable, path: Sequence[Hashable] = ()) -> None:
        self.node = node
        self.dependency = dependency
        self.path = tuple(path) or (node, dependency)
        cycle = " -> ".join(repr(n) for n in self.path)
        msg = f"Dependency cycle detected: {node!r} depends on {dependency!r} ({cycle})"
        super().__init__(msg)


class NodeNotFoundError(DependencyGraphError, KeyError):
    """The requested node was never registered in the graph."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        msg = f"Node {node!r} is not registered in the dependency graph"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise render the repr of the message
        return str(self.args[0])
