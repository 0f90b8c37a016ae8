"""Lazy, cycle-safe depth-first traversal over a dependency snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._errors import CycleDetectedError

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


@dataclass(slots=True)
class _Frame[T]:
    """A node on the walk stack and the dependencies it has left to visit."""

    node: T
    remaining: Iterator[T]


class DependencyWalk[T: Hashable]:
    """Iterator yielding nodes so that dependencies always come first.

    The walk is an explicit-stack, post-order depth-first search. Each call to
    ``next()`` advances the stack only until the next node can be emitted, so
    the walk can be suspended between nodes without any recursion.

    The walk takes ownership of ``dependencies`` and reads it as given; the
    caller must not mutate the mapping or its sequences afterwards.
    :meth:`DependencyGraph.dependencies_of` hands it a fresh snapshot, so
    mutating the graph after creation has no effect on the walk.

    Satisfied nodes are never emitted and never descended into. When a cycle
    is found, ``next()`` raises :class:`CycleDetectedError` once and the walk
    is exhausted from then on.

    Attributes:
        roots: The nodes whose dependency closures are walked, in order.

    """

    __slots__ = (
        "_dependencies",
        "_done",
        "_error",
        "_exhausted",
        "_in_progress",
        "_pending_roots",
        "_satisfied",
        "_stack",
        "roots",
    )

    def __init__(
        self,
        dependencies: Mapping[T, Sequence[T]],
        roots: Iterable[T],
        satisfied: Iterable[T] = (),
    ) -> None:
        self._dependencies = dependencies
        self._satisfied = frozenset(satisfied)
        self.roots = tuple(roots)
        self._pending_roots = iter(self.roots)
        self._stack: list[_Frame[T]] = []
        self._in_progress: set[T] = set()
        self._done: set[T] = set()
        self._error: CycleDetectedError | None = None
        self._exhausted = False

    @property
    def error(self) -> CycleDetectedError | None:
        """The cycle that stopped the walk, if any."""
        return self._error

    @property
    def exhausted(self) -> bool:
        """Whether the walk can produce no further nodes."""
        return self._exhausted

    def __iter__(self) -> DependencyWalk[T]:
        """Return the walk itself; it can be consumed only once."""
        return self

    def __next__(self) -> T:
        """Advance to the next node whose dependencies have all been emitted."""
        if self._exhausted:
            raise StopIteration

        while True:
            if not self._stack:
                root = next(self._pending_roots, _EXHAUSTED)
                if root is _EXHAUSTED:
                    self._exhausted = True
                    raise StopIteration
                if root in self._done or root in self._satisfied:
                    continue
                self._push(root)  # type: ignore[arg-type]
                continue

            frame = self._stack[-1]
            dependency = next(frame.remaining, _EXHAUSTED)

            if dependency is _EXHAUSTED:
                self._stack.pop()
                self._in_progress.discard(frame.node)
                self._done.add(frame.node)
                logger.debug("Emitting %r", frame.node)
                return frame.node

            if dependency in self._done:
                continue
            if dependency in self._satisfied:
                logger.debug("Skipping satisfied dependency %r of %r", dependency, frame.node)
                continue
            if dependency in self._in_progress:
                raise self._fail(frame.node, dependency)  # type: ignore[arg-type]

            self._push(dependency)  # type: ignore[arg-type]

    def _push(self, node: T) -> None:
        self._in_progress.add(node)
        self._stack.append(_Frame(node, iter(self._dependencies.get(node, ()))))

    def _fail(self, node: T, dependency: T) -> CycleDetectedError:
        """Poison the walk and build the error describing the offending edge."""
        path = [frame.node for frame in self._stack]
        start = path.index(dependency)
        cycle = (*path[start:], dependency)
        logger.debug("Circular dependency detected: %s", " -> ".join(repr(n) for n in cycle))

        self._error = CycleDetectedError(node, dependency, cycle)
        self._exhausted = True
        self._stack.clear()
        self._in_progress.clear()
        return self._error
