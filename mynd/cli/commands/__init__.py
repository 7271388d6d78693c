"""
FILE: mynd/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Importing the modules registers their commands with the app
from .todos import (
    add,
    ls,
    done,
    rm,
    clean,
)
from .ordering import (
    up,
    down,
    below,
)
from .transfer import (
    dump,
    import_,
)
from .config import (
    config_get,
    config_set,
    config_ls,
)
from .system import (
    version,
    repl,
)

__all__ = [
    "add",
    "ls",
    "done",
    "rm",
    "clean",
    "up",
    "down",
    "below",
    "dump",
    "import_",
    "config_get",
    "config_set",
    "config_ls",
    "version",
    "repl",
]
