"""Reading and writing dependency manifests in TOML."""

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._graph import DependencyGraph
from ._order import SiblingOrder

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Error in a dependency manifest."""


class Manifest(BaseModel):
    """Contents of a dependency manifest.

    Example manifest::

        satisfied = ["e"]

        [dependencies]
        a = ["b", "c", "d"]
        b = ["d"]
        c = ["e"]

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dependencies: dict[str, list[str]] = Field(default_factory=dict)
    satisfied: list[str] = Field(default_factory=list)


def graph_from_manifest(
    manifest: Manifest,
    sibling_order: SiblingOrder = SiblingOrder.REGISTRATION,
) -> DependencyGraph[str]:
    """Build a graph from a validated manifest.

    Nodes are registered in manifest order, so with the default sibling
    order the resolution follows the order in which the file lists them.
    """
    graph: DependencyGraph[str] = DependencyGraph(sibling_order=sibling_order)
    for node, depends_on in manifest.dependencies.items():
        graph.register_dependencies(node, depends_on)
    graph.mark_as_satisfied(manifest.satisfied)
    return graph


def load_manifest(
    path: Path,
    sibling_order: SiblingOrder = SiblingOrder.REGISTRATION,
) -> DependencyGraph[str]:
    """Load a dependency graph from a TOML manifest.

    Args:
        path: Path to the manifest file.
        sibling_order: Sibling order of the returned graph.

    Returns:
        The graph described by the manifest.

    Raises:
        ManifestError: If the file is not valid TOML or does not describe a graph.

    """
    with path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise ManifestError(msg) from e

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid dependency manifest {path}: {e}"
        raise ManifestError(msg) from e

    graph = graph_from_manifest(manifest, sibling_order)
    logger.info("Loaded %d nodes from %s", len(graph), path)
    return graph


def manifest_from_graph(graph: DependencyGraph[Any]) -> Manifest:
    """Describe a graph of string nodes as a manifest.

    Every registered node is listed, including nodes that were only ever
    mentioned as dependencies.

    Raises:
        TypeError: If the graph contains a node that is not a string.

    """
    for node in (*graph, *graph.satisfied):
        if not isinstance(node, str):
            msg = f"Only string nodes can be written to a manifest, got {node!r}"
            raise TypeError(msg)

    return Manifest(
        dependencies={node: list(graph.dependencies(node)) for node in graph},
        satisfied=sorted(graph.satisfied),
    )


def export_manifest(graph: DependencyGraph[Any], path: Path) -> None:
    """Write a graph of string nodes to a TOML manifest.

    Raises:
        TypeError: If the graph contains a node that is not a string.

    """
    manifest = manifest_from_graph(graph)
    with path.open("wb") as f:
        tomli_w.dump(manifest.model_dump(mode="python"), f)
    logger.info("Exported %d nodes to %s", len(graph), path)
