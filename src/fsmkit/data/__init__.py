"""Bundled data resources: default configuration and JSON schemas."""
from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the path of a bundled data directory or file.

    Example:
        >>> get_data_path("schemas", "config.schema.yaml").name
        'config.schema.yaml'
    """
    base = Path(str(resources.files("fsmkit.data").joinpath(subpackage)))
    return base / filename if filename else base


__all__ = ["get_data_path"]
