"""Shared utilities (merging, YAML I/O, module loading)."""
