"""Configuration loading from pyproject.toml."""

import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ._graph import DependencyGraph
from ._io import load_manifest
from ._order import SiblingOrder


PYPROJECT = "pyproject.toml"


class ConfigError(Exception):
    """Error in dagwalk configuration."""


@dataclass(slots=True, frozen=True)
class DagwalkConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    manifest: Path | None = None
    sibling_order: SiblingOrder = SiblingOrder.REGISTRATION
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml in ``start_dir`` (default: cwd) or any parent, or None."""
    here = (start_dir or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        if (directory / PYPROJECT).is_file():
            return directory / PYPROJECT
    return None


def _parse_manifest(value: object, project_root: Path) -> Path:
    if not isinstance(value, str):
        msg = "Invalid [tool.dagwalk].manifest: expected string path"
        raise ConfigError(msg)
    return project_root / value


def _parse_sibling_order(value: object, _project_root: Path) -> SiblingOrder:
    if not isinstance(value, str):
        msg = "Invalid [tool.dagwalk].sibling-order: expected string"
        raise ConfigError(msg)
    try:
        return SiblingOrder(value)
    except ValueError:
        choices = ", ".join(f"'{order.value}'" for order in SiblingOrder)
        msg = f"Invalid [tool.dagwalk].sibling-order '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


# TOML key -> (DagwalkConfig field, parser)
_PARSERS: dict[str, tuple[str, Callable[[object, Path], object]]] = {
    "manifest": ("manifest", _parse_manifest),
    "sibling-order": ("sibling_order", _parse_sibling_order),
}


def load_config(pyproject_path: Path) -> DagwalkConfig:
    """Read the [tool.dagwalk] table of a pyproject.toml.

    A missing table yields the defaults. A relative ``manifest`` is taken
    relative to the directory holding pyproject.toml.

    Raises:
        ConfigError: If the file is not valid TOML, or the table has unknown
            keys or values of the wrong type.

    """
    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    table = data.get("tool", {}).get("dagwalk", {})
    unknown = sorted(set(table) - set(_PARSERS))
    if unknown:
        msg = f"Unknown [tool.dagwalk] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    root = pyproject_path.parent
    settings = {_PARSERS[key][0]: _PARSERS[key][1](value, root) for key, value in table.items()}
    return DagwalkConfig(project_root=root, **settings)


def get_config(start_dir: Path | None = None) -> DagwalkConfig:
    """Get config from pyproject.toml in start_dir (default: current directory) or its parents.

    Returns:
        DagwalkConfig (may be empty if no pyproject.toml or no [tool.dagwalk] section)

    """
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is None:
        return DagwalkConfig()
    return load_config(pyproject_path)


def load_configured_graph(start_dir: Path | None = None) -> DependencyGraph[str]:
    """Load the manifest named by [tool.dagwalk] with the configured sibling order.

    Raises:
        ConfigError: If no manifest is configured.
        ManifestError: If the configured manifest is invalid.

    """
    config = get_config(start_dir)
    if config.manifest is None:
        msg = "No dependency manifest configured. Set [tool.dagwalk].manifest in pyproject.toml."
        raise ConfigError(msg)
    return load_manifest(config.manifest, sibling_order=config.sibling_order)
