"""Tests for Resolution result values and the error types they carry."""

import pytest

from dagwalk import CycleDetectedError, DependencyGraphError, NodeNotFoundError, Resolution


def test_successful_resolution() -> None:
    resolution = Resolution(target="a", order=("b", "a"))
    assert resolution.ok
    assert bool(resolution) is True
    assert resolution.unwrap() == ["b", "a"]


def test_failed_resolution_unwrap_raises_stored_error() -> None:
    error = CycleDetectedError("b", "a", ("a", "b", "a"))
    resolution = Resolution(target="a", error=error)
    assert not resolution.ok
    assert bool(resolution) is False
    with pytest.raises(CycleDetectedError) as excinfo:
        resolution.unwrap()
    assert excinfo.value is error


def test_resolution_is_frozen() -> None:
    resolution = Resolution(target="a")
    with pytest.raises(AttributeError):
        resolution.target = "b"  # type: ignore[misc]


def test_errors_share_a_base_class() -> None:
    assert issubclass(CycleDetectedError, DependencyGraphError)
    assert issubclass(NodeNotFoundError, DependencyGraphError)
    assert issubclass(NodeNotFoundError, KeyError)


def test_cycle_error_default_path() -> None:
    error = CycleDetectedError("a", "b")
    assert error.path == ("a", "b")
    assert str(error) == "Dependency cycle detected: 'a' depends on 'b' ('a' -> 'b')"


def test_node_not_found_message_is_plain() -> None:
    assert str(NodeNotFoundError("x")) == "Node 'x' is not registered in the dependency graph"
