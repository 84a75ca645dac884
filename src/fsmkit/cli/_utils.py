"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from fsmkit.core.audit import configure_stdlib_logging
from fsmkit.core.config import ConfigManager
from fsmkit.core.exceptions import ConfigError
from fsmkit.core.state import load_handlers


def load_machine(args: argparse.Namespace) -> tuple:
    """Load configuration named by ``args`` and return the handler sequence.

    Also configures logging from the ``logging`` section.
    """
    repo_root = getattr(args, "repo_root", None)
    config_path = getattr(args, "config", None)
    manager = ConfigManager(
        Path(repo_root) if repo_root else None,
        config_path=Path(config_path) if config_path else None,
    )
    cfg = manager.load_config()

    log_cfg = cfg.get("logging", {}) or {}
    configure_stdlib_logging(
        log_path=Path(log_cfg["path"]) if log_cfg.get("path") else None,
        level=str(log_cfg.get("level") or "WARNING"),
    )

    # Handler references resolve relative to the project root.
    root = str(manager.repo_root)
    if root not in sys.path:
        sys.path.insert(0, root)
    return load_handlers(cfg, root=manager.repo_root)


def parse_params(raw: str | None) -> Any:
    """Parse a ``--params`` JSON value (None when absent)."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"--params must be valid JSON: {exc}") from exc


__all__ = ["load_machine", "parse_params"]
