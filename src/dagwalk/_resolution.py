"""Result values for complete dependency resolutions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._errors import DependencyGraphError


@dataclass(frozen=True, slots=True)
class Resolution[T]:
    """Outcome of resolving every dependency of a target.

    Either ``order`` holds the full ordering and ``error`` is ``None``, or
    ``error`` holds the failure and ``order`` is empty. Partial orderings
    produced before a failure are never exposed.

    Attributes:
        target: The node that was resolved.
        order: Nodes in dependency order, ending with the target unless it is satisfied.
        error: The failure that stopped the resolution, if any.

    """

    target: T
    order: tuple[T, ...] = ()
    error: DependencyGraphError | None = None

    @property
    def ok(self) -> bool:
        """Whether the resolution succeeded."""
        return self.error is None

    def unwrap(self) -> list[T]:
        """Return the ordering, or raise the failure that prevented it.

        Raises:
            CycleDetectedError: If the target's dependencies contain a cycle.
            NodeNotFoundError: If the target was not registered.

        """
        if self.error is not None:
            raise self.error
        return list(self.order)

    def __bool__(self) -> bool:
        """Truthy when the resolution succeeded, like :attr:`ok`."""
        return self.ok
