"""Resolve a build order from a TOML manifest and report cycles as values."""

import logging
from pathlib import Path

import dagwalk

MANIFEST = Path(__file__).with_name("build.toml")

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    graph = dagwalk.load_manifest(MANIFEST, sibling_order=dagwalk.SiblingOrder.SORTED)

    resolution = graph.resolve("app")
    print("build order:", " ".join(resolution.unwrap()))

    # Introduce a cycle: the walk reports the offending edge instead of looping
    graph.register_dependency("config", "app")
    resolution = graph.resolve("app")
    if not resolution.ok:
        print("cannot build:", resolution.error)
