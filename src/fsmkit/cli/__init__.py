"""
fsmkit CLI package.

Introspection commands for a configured machine, auto-discovered from
``cli/commands``. Framework utilities:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import add_config_flag, add_json_flag, add_repo_root_flag, add_state_arg, add_standard_flags
from ._utils import load_machine, parse_params

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_config_flag",
    "add_state_arg",
    "add_standard_flags",
    # Utilities
    "load_machine",
    "parse_params",
]
