"""Mutable dependency graph with lazy, satisfaction-aware resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import CycleDetectedError, DependencyGraphError, NodeNotFoundError
from ._order import SiblingOrder
from ._resolution import Resolution
from ._walk import DependencyWalk

if TYPE_CHECKING:
    from collections.abc import Collection, Hashable, Iterable, Iterator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DependencyGraph[T: Hashable]:
    """A directed graph of "depends on" relationships between nodes.

    Nodes are any hashable values (e.g., str, int, tuple). Registering an
    edge creates both of its endpoints, so a node that is only ever mentioned
    as a dependency still exists, with no dependencies of its own.

    Nodes can be marked as satisfied: resolution then treats them as already
    done, neither emitting them nor looking at what they depend on. Marking a
    node that is not registered is allowed and does not register it; the mark
    takes effect if the node is registered later.

    Walks created from the graph work on a snapshot, so the graph may be
    mutated freely while a walk is being consumed.

    Attributes:
        sibling_order: Order in which the dependencies of a node are visited.

    Example:
        >>> graph = DependencyGraph()
        >>> graph.register_dependencies("a", ["b", "c", "d"])
        >>> graph.register_dependency("b", "d")
        >>> graph.register_dependency("c", "e")
        >>> list(graph.dependencies_of("a"))
        ['d', 'b', 'e', 'c', 'a']

    """

    sibling_order: SiblingOrder = SiblingOrder.REGISTRATION
    _edges: dict[T, dict[T, None]] = field(default_factory=dict, init=False, repr=False)
    _satisfied: dict[T, None] = field(default_factory=dict, init=False, repr=False)

    def __setattr__(self, name: str, value: object) -> None:
        """Coerce ``sibling_order`` so plain strings such as "sorted" are accepted on every assignment."""
        if name == "sibling_order":
            value = SiblingOrder(value)
        object.__setattr__(self, name, value)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def register_node(self, node: T) -> None:
        """Ensure ``node`` exists in the graph without adding any edge."""
        if node not in self._edges:
            logger.debug("Registering node %r", node)
            self._edges[node] = {}

    def register_dependency(self, node: T, depends_on: T) -> None:
        """Record that ``node`` depends on ``depends_on``.

        Neither node needs to exist beforehand. Registering an edge that
        already exists has no effect.

        Args:
            node: The dependent node.
            depends_on: The node that must come before ``node``.

        """
        self.register_node(node)
        self.register_node(depends_on)
        self._edges[node][depends_on] = None

    def register_dependencies(self, node: T, depends_on: Iterable[T]) -> None:
        """Record that ``node`` depends on every node in ``depends_on``.

        ``node`` is registered even when ``depends_on`` is empty.

        Args:
            node: The dependent node.
            depends_on: The nodes that must come before ``node``, in registration order.

        Raises:
            TypeError: If ``depends_on`` is a single string rather than a collection of nodes.

        """
        _reject_bare_string(depends_on, "depends_on")
        self.register_node(node)
        for dependency in depends_on:
            self.register_dependency(node, dependency)

    def mark_as_satisfied(self, nodes: Iterable[T]) -> None:
        """Mark nodes as already resolved.

        Satisfied nodes are left out of every resolution, together with
        anything that is only needed through them.

        Raises:
            TypeError: If ``nodes`` is a single string rather than a collection of nodes.

        """
        _reject_bare_string(nodes, "nodes")
        for node in nodes:
            if node not in self._edges:
                logger.debug("Marking unregistered node %r as satisfied", node)
            self._satisfied[node] = None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> frozenset[T]:
        """All registered nodes."""
        return frozenset(self._edges)

    @property
    def satisfied(self) -> frozenset[T]:
        """All nodes marked as satisfied, registered or not."""
        return frozenset(self._satisfied)

    def is_satisfied(self, node: T) -> bool:
        """Check whether ``node`` has been marked as satisfied."""
        return node in self._satisfied

    def dependencies(self, node: T) -> tuple[T, ...]:
        """Get the direct dependencies of a node, in sibling order.

        Returns an empty tuple for nodes that are not registered.
        """
        return self.sibling_order.arrange(self._edges.get(node, {}))

    def transitive_dependencies(self, node: T) -> frozenset[T]:
        """Get every node that ``node`` depends on, directly or not.

        Satisfaction is ignored. ``node`` itself is included only if it lies
        on a cycle.
        """
        visited: set[T] = set()
        stack = list(self._edges.get(node, {}))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self._edges.get(current, {}))
        return frozenset(visited)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def dependencies_of(self, target: T) -> DependencyWalk[T]:
        """Walk the dependencies of ``target`` in an order that satisfies them.

        Every node ``target`` transitively depends on is yielded once, after
        all of its own dependencies, and ``target`` comes last. Satisfied
        nodes, and whatever is reachable only through them, are skipped. A
        satisfied target yields nothing.

        Args:
            target: The node to resolve.

        Returns:
            A lazy iterator over the nodes. Iterating it raises
            :class:`CycleDetectedError` if a cycle is reachable from ``target``.

        Raises:
            NodeNotFoundError: If ``target`` is not registered.

        """
        if target not in self._edges:
            raise NodeNotFoundError(target)
        logger.debug("Walking dependencies of %r", target)
        dependencies, satisfied = self._snapshot((target,), self._satisfied)
        return DependencyWalk(dependencies, roots=(target,), satisfied=satisfied)

    def resolve(self, target: T) -> Resolution[T]:
        """Resolve ``target`` completely, reporting failure as a value.

        Unlike :meth:`dependencies_of`, this never raises for a missing
        target or a cycle; the failure is stored on the returned
        :class:`Resolution` instead.
        """
        try:
            order = tuple(self.dependencies_of(target))
        except DependencyGraphError as e:
            return Resolution(target=target, error=e)
        return Resolution(target=target, order=order)

    def ordered_dependencies_of(self, target: T) -> list[T]:
        """Return the full resolution order of ``target`` as a list.

        Raises:
            NodeNotFoundError: If ``target`` is not registered.
            CycleDetectedError: If a cycle is reachable from ``target``.

        """
        return list(self.dependencies_of(target))

    def satisfying_walk(self, target: T) -> Iterator[T]:
        """Walk the dependencies of ``target``, marking each one satisfied as it is yielded.

        Once the walk completes, ``target`` and all of its dependencies are
        satisfied, so a second walk yields nothing. Nodes are marked only when
        they are actually yielded; stopping early leaves the rest unmarked.

        Raises:
            NodeNotFoundError: If ``target`` is not registered.

        """
        return self._marking_satisfied(self.dependencies_of(target))

    def _marking_satisfied(self, walk: DependencyWalk[T]) -> Iterator[T]:
        for node in walk:
            self._satisfied[node] = None
            yield node

    def topological_order(self) -> list[T]:
        """Return every registered node, dependencies before dependents.

        Satisfaction is ignored. Roots are taken in sibling order.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        roots = self.sibling_order.arrange(self._edges)
        dependencies, _ = self._snapshot(roots, frozenset())
        return list(DependencyWalk(dependencies, roots=roots))

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        try:
            self.topological_order()
        except CycleDetectedError:
            return True
        return False

    def _snapshot(
        self,
        roots: Iterable[T],
        satisfied: Collection[T],
    ) -> tuple[dict[T, tuple[T, ...]], frozenset[T]]:
        """Copy the dependency lists a walk from ``roots`` can reach.

        Descent stops at satisfied nodes, which get no entry. Returns the
        arranged dependency lists and the satisfied nodes that were met.
        """
        dependencies: dict[T, tuple[T, ...]] = {}
        pruned: set[T] = set()
        stack = list(roots)
        while stack:
            node = stack.pop()
            if node in satisfied:
                pruned.add(node)
                continue
            if node in dependencies:
                continue
            arranged = self.sibling_order.arrange(self._edges.get(node, {}))
            dependencies[node] = arranged
            stack.extend(arranged)
        return dependencies, frozenset(pruned)

    def __iter__(self) -> Iterator[T]:
        """Iterate over registered nodes in registration order."""
        return iter(self._edges)

    def __len__(self) -> int:
        """Return the number of registered nodes."""
        return len(self._edges)

    def __contains__(self, node: object) -> bool:
        """Check if a node is registered."""
        return node in self._edges


def _reject_bare_string(value: object, argument: str) -> None:
    if isinstance(value, str):
        msg = f"{argument} must be a collection of nodes, not a single string: {value!r}"
        raise TypeError(msg)
