"""Policies for the order in which a node's dependencies are visited."""

from collections.abc import Hashable, Iterable
from enum import StrEnum
from typing import Self


class SiblingOrder(StrEnum):
    """Order in which the direct dependencies of a node are walked.

    Any order gives a valid topological result; the policy only decides which
    of the valid results is produced. Both policies are deterministic.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        """Create a new enum member with a docstring."""
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj

    REGISTRATION = "registration", "Visit dependencies in the order they were first registered"
    SORTED = "sorted", "Visit dependencies sorted by node identity (nodes must be orderable)"

    def arrange[T: Hashable](self, nodes: Iterable[T]) -> tuple[T, ...]:
        """Return ``nodes`` as a tuple arranged according to this policy.

        Raises:
            TypeError: If the policy is ``SORTED`` and the nodes are not mutually orderable.

        """
        if self is SiblingOrder.SORTED:
            return tuple(sorted(nodes))  # type: ignore[type-var]
        return tuple(nodes)
