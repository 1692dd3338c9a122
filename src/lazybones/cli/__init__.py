"""
Lazybones CLI package.

Provides the command-line interface with auto-discovery of commands from
``commands/`` (root commands) and domain subfolders such as ``config/``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import add_global_flags, add_json_flag, add_params_arg, add_setting_name_arg
from ._utils import (
    get_configuration,
    global_options,
    is_current_directory,
    parse_params,
    print_stacktrace,
    report_network_failure,
    resolve_log_level,
    stacktrace_enabled,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_setting_name_arg",
    "add_params_arg",
    "add_global_flags",
    # Utilities
    "get_configuration",
    "global_options",
    "resolve_log_level",
    "stacktrace_enabled",
    "print_stacktrace",
    "report_network_failure",
    "parse_params",
    "is_current_directory",
]
