"""Layered module loading utilities.

Handler modules can be contributed from several directories:
- Core handlers shipped with an application
- Pack directories (optional feature bundles)
- Project directories

Directories are returned and scanned in layer order; later layers override
earlier ones once their handlers are merged.
"""
from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


def build_layer_dirs(
    base_dirs: Iterable[Path],
    *,
    root: Optional[Path] = None,
) -> List[Path]:
    """Resolve handler directories in layer order.

    Args:
        base_dirs: Directories in precedence order (lowest first)
        root: Base for relative entries (default: current directory)

    Returns:
        Absolute directory paths, duplicates removed (first occurrence kept)
    """
    resolved: List[Path] = []
    seen: Set[Path] = set()
    for d in base_dirs:
        path = Path(d)
        if not path.is_absolute() and root is not None:
            path = Path(root) / path
        path = path.resolve()
        if path in seen:
            continue
        seen.add(path)
        resolved.append(path)
    return resolved


def iter_python_files(
    dirs: Iterable[Path],
    exclude: Optional[Set[str]] = None,
) -> Iterable[Path]:
    """Yield all *.py files from existing directories in order.

    Args:
        dirs: Directories to search (in order)
        exclude: Set of filenames to exclude (default: {"__init__.py"})

    Yields:
        Paths to Python files
    """
    if exclude is None:
        exclude = {"__init__.py"}

    for d in dirs:
        if not d or not d.exists():
            continue
        for path in sorted(d.glob("*.py")):
            if path.is_file() and path.name not in exclude:
                yield path


def load_module_from_path(
    path: Path,
    namespace: str = "fsmkit.dynamic",
) -> ModuleType:
    """Load a Python module from file.

    The module is registered in ``sys.modules`` under ``<namespace>.<stem>``
    before it executes; a failed load removes it again.

    Args:
        path: Path to the .py file
        namespace: Module namespace prefix for the loaded module

    Returns:
        Loaded module

    Raises:
        ImportError: if the file cannot be loaded or raises while executing
    """
    module_name = f"{namespace}.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load module %s: %s", path, exc)
        raise ImportError(f"Failed to load module {path}: {exc}") from exc
    return module


__all__ = [
    "build_layer_dirs",
    "iter_python_files",
    "load_module_from_path",
]
