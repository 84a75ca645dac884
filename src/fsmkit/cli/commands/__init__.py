"""Top-level fsmkit commands."""
