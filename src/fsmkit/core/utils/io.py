"""YAML file helpers."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml_file(path: Path, default: Any = None) -> Any:
    """Parse a YAML file.

    An empty document yields ``default``.

    Raises:
        FileNotFoundError: the file does not exist
        yaml.YAMLError: the file is not valid YAML
    """
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return default if data is None else data


__all__ = ["load_yaml_file"]
