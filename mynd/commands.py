"""
FILE: mynd/commands.py
PURPOSE: Command surface shared by the CLI and the interactive session
EXPORTS:
  - CommandSurface (class)
    - invoke(name, params) -> CommandResult
  - CommandResult, CommandError (dataclasses)
  - AddRequest, IdRequest, MoveBelowRequest, ImportRequest, ConfigRequest
  - COMMAND_NAMES: every command invoke() accepts
  - open_surface(config_path) -> CommandSurface
DEPENDENCIES:
  - mynd.core.service (TodoStore)
  - mynd.core.repository (repository_for)
  - mynd.core.exceptions (MyndError, ValidationError)
  - mynd.config (load_config, get_config_value, set_config_value)
NOTES:
  - One named command per store operation, plus config_get/config_set
  - Loose params (CLI args, REPL tokens, decoded JSON) become a typed
    request once, here; the store never sees raw mappings
  - Loads the store on first use in the process
  - Never raises MyndError: errors come back as CommandResult.error
  - No business logic lives here
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .config import (
    load_config,
    get_config_value,
    set_config_value,
    normalize_value,
)
from .core.exceptions import MyndError, ValidationError
from .core.models import Todo
from .core.repository import repository_for
from .core.service import TodoStore

logger = logging.getLogger(__name__)


# --- Requests ---


def _require_str(params: Mapping[str, Any], *names: str) -> str:
    """First present param among names, which must be a non-empty string."""
    for name in names:
        if name in params and params[name] is not None:
            value = params[name]
            if not isinstance(value, str):
                raise ValidationError(f"'{names[0]}' must be a string")
            if not value.strip():
                raise ValidationError(f"'{names[0]}' cannot be empty")
            return value
    raise ValidationError(f"Missing required parameter '{names[0]}'")


@dataclass(frozen=True)
class AddRequest:
    message: str

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "AddRequest":
        # Accept "todo" too, the name the desktop app sends
        message = params.get("message", params.get("todo"))
        if not isinstance(message, str):
            raise ValidationError("Missing required parameter 'message'")
        return cls(message=message)


@dataclass(frozen=True)
class IdRequest:
    id: str

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "IdRequest":
        return cls(id=_require_str(params, "id").strip())


@dataclass(frozen=True)
class MoveBelowRequest:
    id: str
    target_id: str

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "MoveBelowRequest":
        return cls(
            id=_require_str(params, "id").strip(),
            target_id=_require_str(params, "targetId", "target_id").strip(),
        )


@dataclass(frozen=True)
class ImportRequest:
    path: str

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ImportRequest":
        return cls(path=_require_str(params, "path"))


@dataclass(frozen=True)
class ConfigRequest:
    key: str
    value: Optional[str] = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ConfigRequest":
        value = params.get("value")
        if value is not None and not isinstance(value, str):
            raise ValidationError("'value' must be a string")
        return cls(key=_require_str(params, "key").strip(), value=value)


# --- Results ---


@dataclass(frozen=True)
class CommandError:
    """Structured error: kind is one of validation, not_found, io, format."""

    kind: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one command.

    Attributes:
        command: Command name that was invoked
        data: List of Todo for list commands, a string for config commands
        error: Set when the command failed (data is then None)
    """

    command: str
    data: Any = None
    error: Optional[CommandError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def todos(self) -> list:
        if isinstance(self.data, list):
            return self.data
        return []

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"ok": False, "error": self.error.to_dict()}

        data = self.data
        if isinstance(data, list):
            data = [t.to_dict() if isinstance(t, Todo) else t for t in data]
        return {"ok": True, "data": data}

    def data_json(self, indent: Optional[int] = 2) -> str:
        """JSON of just the data (what `dump` prints)."""
        return json.dumps(self.to_dict().get("data"), indent=indent)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


# --- Surface ---

# Commands that don't need the list loaded up front
_NO_AUTOLOAD = ("load", "config_get", "config_set")


class CommandSurface:
    """
    Maps named commands onto a TodoStore.

    Attributes:
        store: The TodoStore all commands operate on
        config_path: config.toml used by config_get/config_set
            (None means the default location)
    """

    def __init__(self, store: TodoStore, config_path: Optional[Path] = None):
        self.store = store
        self.config_path = config_path
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
            "load": self._load,
            "add": self._add,
            "remove": self._remove,
            "delete": self._delete,
            "remove_done": self._remove_done,
            "move_up": self._move_up,
            "move_down": self._move_down,
            "move_below": self._move_below,
            "dump": self._dump,
            "import": self._import,
            "list_pending": self._list_pending,
            "config_get": self._config_get,
            "config_set": self._config_set,
        }

    def invoke(self, name: str, params: Optional[Mapping[str, Any]] = None) -> CommandResult:
        """
        Run one command.

        Args:
            name: Command name (see COMMAND_NAMES)
            params: Loose parameter mapping for the command

        Returns:
            CommandResult with data on success or a CommandError
        """
        params = params or {}
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise ValidationError(f"Unknown command '{name}'")
            if not isinstance(params, Mapping):
                raise ValidationError("Command parameters must be a mapping")

            # "load" always re-reads; todo commands load once per process
            if name not in _NO_AUTOLOAD and not self.store.loaded:
                self.store.load()

            data = handler(params)
        except MyndError as e:
            logger.warning("Command %s failed (%s): %s", name, e.kind, e)
            return CommandResult(command=name, error=CommandError(kind=e.kind, message=str(e)))

        return CommandResult(command=name, data=data)

    # --- Todo commands ---

    def _load(self, params):
        return self.store.load()

    def _add(self, params):
        request = AddRequest.from_params(params)
        return self.store.add(request.message)

    def _remove(self, params):
        return self.store.remove(IdRequest.from_params(params).id)

    def _delete(self, params):
        return self.store.delete(IdRequest.from_params(params).id)

    def _remove_done(self, params):
        return self.store.remove_done()

    def _move_up(self, params):
        return self.store.move_up(IdRequest.from_params(params).id)

    def _move_down(self, params):
        return self.store.move_down(IdRequest.from_params(params).id)

    def _move_below(self, params):
        request = MoveBelowRequest.from_params(params)
        return self.store.move_below(request.id, request.target_id)

    def _dump(self, params):
        return self.store.dump()

    def _import(self, params):
        return self.store.import_from(ImportRequest.from_params(params).path)

    def _list_pending(self, params):
        return self.store.list_pending()

    # --- Config commands ---

    def _config_get(self, params):
        request = ConfigRequest.from_params(params)
        return get_config_value(request.key, self.config_path)

    def _config_set(self, params):
        request = ConfigRequest.from_params(params)
        if request.value is None:
            raise ValidationError("Missing required parameter 'value'")

        if request.key not in ("save_file_format", "data_file"):
            return set_config_value(request.key, request.value, self.config_path)

        repository, todos, loaded = self.store.repository, self.store._todos, self.store.loaded
        self._switch_data_file(request.key, request.value)
        try:
            return set_config_value(request.key, request.value, self.config_path)
        except MyndError:
            # config.toml still names the old file
            self.store.repository, self.store._todos, self.store.loaded = repository, todos, loaded
            raise

    def _switch_data_file(self, key: str, value: str) -> None:
        """
        Point the store at the data file the new setting describes.

        An existing file at a new path is opened as-is; otherwise the current
        list is written there first (in the new format if only that changed).
        """
        config = load_config(self.config_path)
        setattr(config, key, normalize_value(key, value))
        target = repository_for(config)

        current = self.store.repository
        if type(target) is type(current) and target.path == current.path:
            return

        if target.path != current.path and target.exists():
            self.store.repository = target
            try:
                self.store.load()
            except MyndError:
                self.store.repository = current
                raise
            return

        if not self.store.loaded:
            self.store.load()
        self.store.relocate(target)


COMMAND_NAMES = (
    "load",
    "add",
    "remove",
    "delete",
    "remove_done",
    "move_up",
    "move_down",
    "move_below",
    "dump",
    "import",
    "list_pending",
    "config_get",
    "config_set",
)


def open_surface(config_path: Optional[Path] = None) -> CommandSurface:
    """
    Build a CommandSurface on the configured data file.

    Raises:
        MyndError: If the config file can't be read or is invalid
    """
    config = load_config(config_path)
    store = TodoStore(repository_for(config))
    return CommandSurface(store, config_path=config_path)
