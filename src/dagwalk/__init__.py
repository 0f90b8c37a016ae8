"""Dependency graph resolution."""

__all__ = [
    "ConfigError",
    "CycleDetectedError",
    "DagwalkConfig",
    "DependencyGraph",
    "DependencyGraphError",
    "DependencyWalk",
    "Manifest",
    "ManifestError",
    "NodeNotFoundError",
    "Resolution",
    "SiblingOrder",
    "export_manifest",
    "find_pyproject_toml",
    "get_config",
    "graph_from_manifest",
    "load_config",
    "load_configured_graph",
    "load_manifest",
    "manifest_from_graph",
]

from ._config import ConfigError, DagwalkConfig, find_pyproject_toml, get_config, load_config, load_configured_graph
from ._errors import CycleDetectedError, DependencyGraphError, NodeNotFoundError
from ._graph import DependencyGraph
from ._io import Manifest, ManifestError, export_manifest, graph_from_manifest, load_manifest, manifest_from_graph
from ._order import SiblingOrder
from ._resolution import Resolution
from ._walk import DependencyWalk
