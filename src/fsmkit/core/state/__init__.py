from .protocols import (
    EVENT_DOC,
    TRANSITION_DOC,
    FsmHandlerProtocol,
    MachineState,
    StateCapability,
    event_doc_key,
    transition_doc_key,
)
from .replies import (
    ILLEGAL_ACTION,
    BypassInfo,
    DispatchError,
    DispatchResult,
    KnownTransitionInfo,
    NextState,
    NextStateWithTimeout,
    error,
    keep_state,
    next_state,
)
from .specs import build_bypasses, build_docs, build_transitions, clear_spec_cache
from .resolver import find_bypass, find_handler, find_info, find_state_handler, infos
from .availability import action_available, available_actions
from .engine import Machine, dispatch
from .handler import FsmHandler, bypass, transition
from .loader import import_handler, load_handlers


__all__ = [
    # Capability interfaces
    "StateCapability",
    "FsmHandlerProtocol",
    "MachineState",
    "TRANSITION_DOC",
    "EVENT_DOC",
    "transition_doc_key",
    "event_doc_key",
    # Replies and results
    "ILLEGAL_ACTION",
    "next_state",
    "keep_state",
    "error",
    "NextState",
    "NextStateWithTimeout",
    "DispatchError",
    "DispatchResult",
    "KnownTransitionInfo",
    "BypassInfo",
    # Merging
    "build_transitions",
    "build_bypasses",
    "build_docs",
    "clear_spec_cache",
    # Resolution
    "find_handler",
    "find_state_handler",
    "find_bypass",
    "find_info",
    "infos",
    # Dispatch
    "dispatch",
    "Machine",
    "available_actions",
    "action_available",
    # Authoring
    "FsmHandler",
    "transition",
    "bypass",
    # Loading
    "import_handler",
    "load_handlers",
]
