"""Assemble a handler sequence from configuration.

Handlers come from two sources, in this order:
1. ``machine.handlers``: explicit import references (``pkg.module:Attr``)
2. ``machine.handler_dirs``: directories scanned for ``*.py`` files

Order matters: when handlers are merged, later handlers override earlier ones
for the same transition or bypass key.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, List, Mapping, Optional

from ..exceptions import HandlerLoadError
from ..utils.loader import build_layer_dirs, iter_python_files, load_module_from_path
from .handler import is_handler_class
from .specs import clear_spec_cache

logger = logging.getLogger(__name__)


def import_handler(ref: str) -> Any:
    """Import a handler from ``"module:attr"`` or ``"module"``.

    A bare module reference makes the module itself the handler.
    """
    module_name, _, attr = str(ref).partition(":")
    if not module_name:
        raise HandlerLoadError(f"Invalid handler reference: {ref!r}", context={"ref": ref})
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise HandlerLoadError(
            f"Cannot import handler module {module_name!r}: {exc}",
            context={"ref": ref},
        ) from exc
    if not attr:
        return module

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise HandlerLoadError(
                f"Handler {attr!r} not found in {module_name!r}",
                context={"ref": ref},
            ) from exc
    return target


def handlers_from_module(module: ModuleType) -> List[type]:
    """Return handler classes defined in ``module``, in definition order."""
    return [
        obj
        for obj in vars(module).values()
        if is_handler_class(obj) and obj.__module__ == module.__name__
    ]


def load_handlers_from_dirs(dirs: Iterable[Path], *, root: Optional[Path] = None) -> List[type]:
    """Load handler classes from layered directories (lowest layer first)."""
    handlers: List[type] = []
    for path in iter_python_files(build_layer_dirs(dirs, root=root)):
        try:
            module = load_module_from_path(path, "fsmkit.handlers")
        except ImportError as exc:
            raise HandlerLoadError(str(exc), context={"path": str(path)}) from exc
        handlers.extend(handlers_from_module(module))
    return handlers


def load_handlers(config: Optional[Mapping[str, Any]] = None, *, root: Optional[Path] = None) -> tuple:
    """Return the configured handler sequence.

    Args:
        config: Full configuration mapping (loaded via ConfigManager if None)
        root: Base directory for relative ``handler_dirs`` entries

    Returns:
        Tuple of handlers in merge order
    """
    if config is None:
        from fsmkit.core.config import ConfigManager

        manager = ConfigManager(root)
        config = manager.load_config()
        root = manager.repo_root

    machine_cfg = config.get("machine", {}) or {}
    refs = machine_cfg.get("handlers", []) or []
    dirs = [Path(d) for d in (machine_cfg.get("handler_dirs", []) or [])]

    handlers: List[Any] = [import_handler(ref) for ref in refs]
    handlers.extend(load_handlers_from_dirs(dirs, root=root))

    # Freshly loaded classes may reuse identities of stale cache entries.
    clear_spec_cache()
    logger.debug("Loaded %d handlers (%d refs, %d dirs)", len(handlers), len(refs), len(dirs))
    return tuple(handlers)


__all__ = [
    "import_handler",
    "handlers_from_module",
    "load_handlers_from_dirs",
    "load_handlers",
]
