"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag (directory holding fsmkit.yaml)."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag for an explicit configuration file."""
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a configuration file (default: <repo-root>/fsmkit.yaml)",
    )


def add_state_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--state",
        required=True,
        help="Current state name",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json, --repo-root and --config."""
    add_json_flag(parser)
    add_repo_root_flag(parser)
    add_config_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_config_flag",
    "add_state_arg",
    "add_standard_flags",
]
