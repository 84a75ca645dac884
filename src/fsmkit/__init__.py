"""
fsmkit - composable finite state machines

Transition rules are contributed by independently authored handlers and merged
into one machine. The engine resolves the handler owning an action, invokes
it, and normalizes its reply into a canonical result.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
