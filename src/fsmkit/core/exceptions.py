from __future__ import annotations

from typing import Any, Dict, Mapping


class FsmError(Exception):
    """Base exception for fsmkit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": {k: _jsonable(v) for k, v in self.context.items()},
        }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


class HandlerContractError(FsmError, RuntimeError):
    """Raised when a handler returns a reply shape the engine does not recognize.

    This signals a defect in the handler itself. It is never converted into an
    ``illegal_action`` result.
    """

    def __init__(
        self,
        message: str = "",
        *,
        handler: Any = None,
        state_name: Any = None,
        action: Any = None,
        reply: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("handler", handler)
        ctx.setdefault("state_name", state_name)
        ctx.setdefault("action", action)
        if not message:
            message = (
                f"Handler {handler!r} returned an invalid reply {reply!r} "
                f"for action {action!r} in state {state_name!r}"
            )
        FsmError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.handler = handler
        self.state_name = state_name
        self.action = action
        self.reply = reply


class UnmatchedClause(FsmError, LookupError):
    """Raised by a handler entry point when no clause serves the call."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FsmError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class HandlerLoadError(FsmError, ImportError):
    """Raised when a configured handler cannot be imported."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FsmError.__init__(self, message, context=context)
        ImportError.__init__(self, message)


class ConfigError(FsmError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FsmError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "FsmError",
    "HandlerContractError",
    "UnmatchedClause",
    "HandlerLoadError",
    "ConfigError",
]
