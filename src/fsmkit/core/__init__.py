"""Core engine, configuration and supporting utilities."""
