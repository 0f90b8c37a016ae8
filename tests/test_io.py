"""Tests for TOML dependency manifests in dagwalk._io."""

import logging
import tomllib
from pathlib import Path

import pytest

from dagwalk import (
    DependencyGraph,
    Manifest,
    ManifestError,
    SiblingOrder,
    export_manifest,
    graph_from_manifest,
    load_manifest,
    manifest_from_graph,
)

MANIFEST = """
satisfied = ["e"]

[dependencies]
a = ["b", "c", "d"]
b = ["d"]
c = ["e"]
"""


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    path = tmp_path / "dependencies.toml"
    path.write_text(MANIFEST)
    return path


class TestLoadManifest:
    def test_load_manifest(self, manifest_path: Path) -> None:
        graph = load_manifest(manifest_path)
        assert graph.nodes == frozenset({"a", "b", "c", "d", "e"})
        assert graph.satisfied == frozenset({"e"})
        assert list(graph.dependencies_of("a")) == ["d", "b", "c", "a"]

    def test_load_manifest_with_sorted_order(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.toml"
        path.write_text('[dependencies]\na = ["c", "b"]\n')
        graph = load_manifest(path, sibling_order=SiblingOrder.SORTED)
        assert graph.sibling_order is SiblingOrder.SORTED
        assert list(graph.dependencies_of("a")) == ["b", "c", "a"]

    def test_empty_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.toml"
        path.write_text("")
        graph = load_manifest(path)
        assert len(graph) == 0

    def test_invalid_toml_raises_manifest_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[dependencies\n")
        with pytest.raises(ManifestError, match="Invalid TOML"):
            load_manifest(path)

    def test_wrong_shape_raises_manifest_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[dependencies]\na = "b"\n')
        with pytest.raises(ManifestError, match="Invalid dependency manifest"):
            load_manifest(path)

    def test_unknown_key_raises_manifest_error(self, tmp_path: Path) -> None:
        path = tmp_path / "extra.toml"
        path.write_text('targets = ["a"]\n')
        with pytest.raises(ManifestError, match="targets"):
            load_manifest(path)

    def test_load_is_logged(self, manifest_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="dagwalk"):
            load_manifest(manifest_path)
        assert "Loaded 5 nodes" in caplog.text


class TestGraphFromManifest:
    def test_registration_follows_manifest_order(self) -> None:
        manifest = Manifest(dependencies={"x": ["z", "y"], "z": ["y"]})
        graph = graph_from_manifest(manifest)
        assert list(graph) == ["x", "z", "y"]
        assert list(graph.dependencies_of("x")) == ["y", "z", "x"]

    def test_unregistered_satisfied_node_is_kept(self) -> None:
        manifest = Manifest(dependencies={"a": []}, satisfied=["ghost"])
        graph = graph_from_manifest(manifest)
        assert "ghost" not in graph
        assert graph.is_satisfied("ghost")

    def test_manifest_is_frozen(self) -> None:
        manifest = Manifest()
        with pytest.raises(ValueError, match="frozen"):
            manifest.satisfied = ["a"]  # type: ignore[misc]


class TestManifestFromGraph:
    def test_includes_implicit_nodes(self) -> None:
        graph: DependencyGraph[str] = DependencyGraph()
        graph.register_dependencies("a", ["b", "c"])
        graph.mark_as_satisfied(["c"])
        manifest = manifest_from_graph(graph)
        assert manifest.dependencies == {"a": ["b", "c"], "b": [], "c": []}
        assert manifest.satisfied == ["c"]

    def test_non_string_nodes_are_rejected(self) -> None:
        graph: DependencyGraph[int] = DependencyGraph()
        graph.register_dependency(1, 2)
        with pytest.raises(TypeError, match="string nodes"):
            manifest_from_graph(graph)

    def test_non_string_satisfied_node_is_rejected(self) -> None:
        graph: DependencyGraph[object] = DependencyGraph()
        graph.register_node("a")
        graph.mark_as_satisfied([3])
        with pytest.raises(TypeError, match="string nodes"):
            manifest_from_graph(graph)


class TestExportManifest:
    def test_export_writes_toml(self, tmp_path: Path) -> None:
        graph: DependencyGraph[str] = DependencyGraph()
        graph.register_dependencies("app", ["lib", "config"])
        graph.register_dependency("lib", "libc")
        graph.mark_as_satisfied(["libc"])

        path = tmp_path / "out.toml"
        export_manifest(graph, path)

        with path.open("rb") as f:
            data = tomllib.load(f)
        assert data == {
            "dependencies": {"app": ["lib", "config"], "lib": ["libc"], "libc": [], "config": []},
            "satisfied": ["libc"],
        }

    def test_exported_manifest_resolves_the_same(self, manifest_path: Path, tmp_path: Path) -> None:
        graph = load_manifest(manifest_path)
        out = tmp_path / "copy.toml"
        export_manifest(graph, out)
        assert load_manifest(out).ordered_dependencies_of("a") == graph.ordered_dependencies_of("a")
