"""CLI output formatting.

Results go to stdout and errors to stderr, either as plain text or, with
``--json``, as JSON documents.
"""
from __future__ import annotations

import json
import sys
from typing import IO, Any, Dict, Optional


class OutputFormatter:
    """Render command results in text or JSON mode."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, payload: Any, stream: Optional[IO[str]] = None) -> None:
        print(json.dumps(payload, indent=self.indent, default=str), file=stream or sys.stdout)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        if self.json_mode:
            self._dump({"status": status, **data})
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Report ``error`` on stderr; FsmError context is included in JSON mode."""
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return
        payload: Dict[str, Any] = {"error": error_code, "message": msg}
        to_json_error = getattr(error, "to_json_error", None)
        if callable(to_json_error):
            payload["context"] = to_json_error()["context"]
        self._dump(payload, sys.stderr)

    def json_output(self, data: Any) -> None:
        self._dump(data)

    def text(self, message: str) -> None:
        print(message)


__all__ = ["OutputFormatter"]
