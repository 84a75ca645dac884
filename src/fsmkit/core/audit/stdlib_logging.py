from __future__ import annotations

import logging
import sys
from pathlib import Path

_CONFIGURED_TARGET: str | None = None
_FSMKIT_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path | None = None, level: str = "INFO") -> None:
    """Configure the ``fsmkit`` logger hierarchy.

    Writes to ``log_path`` when given, otherwise to stderr (never stdout, which
    carries CLI output). Idempotent per-process: reconfiguring for the same
    target only updates the level.
    """
    global _CONFIGURED_TARGET, _FSMKIT_HANDLER

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    logger = logging.getLogger("fsmkit")
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _FSMKIT_HANDLER is not None:
        _FSMKIT_HANDLER.setLevel(_level_from_name(level))
        return

    if _FSMKIT_HANDLER is not None:
        logger.removeHandler(_FSMKIT_HANDLER)
        _FSMKIT_HANDLER.close()
        _FSMKIT_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    _FSMKIT_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_stdlib_logging."""
    global _CONFIGURED_TARGET, _FSMKIT_HANDLER
    logger = logging.getLogger("fsmkit")
    if _FSMKIT_HANDLER is not None:
        logger.removeHandler(_FSMKIT_HANDLER)
        _FSMKIT_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _FSMKIT_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
