"""
FILE: mynd/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

# Export all command handlers for easy importing
from .todos import (
    handle_add_command,
    handle_ls_command,
    handle_done_command,
    handle_rm_command,
    handle_clean_command,
    handle_up_command,
    handle_down_command,
    handle_below_command,
)
from .data import (
    handle_dump_command,
    handle_import_command,
    handle_load_command,
)
from .system import (
    handle_config_command,
    handle_help_command,
    handle_clear_command,
)

__all__ = [
    "handle_add_command",
    "handle_ls_command",
    "handle_done_command",
    "handle_rm_command",
    "handle_clean_command",
    "handle_up_command",
    "handle_down_command",
    "handle_below_command",
    "handle_dump_command",
    "handle_import_command",
    "handle_load_command",
    "handle_config_command",
    "handle_help_command",
    "handle_clear_command",
]
