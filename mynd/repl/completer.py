"""
FILE: mynd/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - MyndCompleter (Completer for command/arg completion)
  - create_completer(todos_provider) -> MyndCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - mynd.config (setting names for "config")
NOTES:
  - Suggests command names when at start of line
  - Suggests todo positions for commands taking a todo, with the
    message as meta text
  - "below" completes positions for both of its arguments
  - Suggests setting names after "config"
  - Suggests flags after commands (--all, --json, --raw)
  - Case-insensitive matching
"""

from typing import Callable, Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..config import CONFIG_KEYS
from ..core.models import Todo


class MyndCompleter(Completer):
    """
    Custom completer for the mynd REPL.

    Provides context-aware autocomplete:
    - Command names at start of input
    - Todo positions after commands that take a todo
    - Setting names after "config"
    - Flags after command names
    """

    # Available commands
    COMMANDS = [
        "add", "ls", "done", "rm", "clean", "up", "down", "below", "dump",
        "import", "load", "config", "help", "clear", "exit", "quit"
    ]

    # Commands whose first argument is a todo
    TODO_COMMANDS = {"done", "rm", "up", "down", "below"}

    # Command-specific flags
    COMMAND_FLAGS = {
        "ls": ["--all", "--json", "--raw"],
    }

    def __init__(self, todos_provider: Optional[Callable[[], List[Todo]]] = None):
        """
        Args:
            todos_provider: Returns the current list for position completion
        """
        self.todos_provider = todos_provider

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Args:
            document: Current document with cursor position
            complete_event: Event that triggered completion

        Yields:
            Completion objects for matching suggestions
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_new_word = text_before_cursor.endswith(" ")

        # Empty input or typing the first word -> suggest commands
        if not words or (not at_new_word and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_commands(word)
            return

        command = words[0].lower()
        # Index of the argument being typed (0 = first after the command)
        arg_index = len(words) - 1 if at_new_word else len(words) - 2
        current = "" if at_new_word else words[-1]

        if command in self.TODO_COMMANDS:
            max_args = 2 if command == "below" else 1
            if arg_index < max_args:
                yield from self._complete_positions(current)
            return

        if command == "config":
            if arg_index == 0:
                yield from self._complete_config_keys(current)
            return

        # Only suggest flags when starting a new word or typing one
        if not current.startswith("--") and not at_new_word:
            return

        yield from self._complete_flags(command, current)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        """
        Complete command names.

        Args:
            word: Partial command being typed

        Yields:
            Completion objects for matching commands
        """
        word_lower = word.lower()
        for command in self.COMMANDS:
            if command.startswith(word_lower):
                yield Completion(
                    command,
                    start_position=-len(word),
                    display=command,
                    display_meta=self._get_command_description(command),
                )

    def _complete_flags(self, command: str, word: str) -> Iterable[Completion]:
        """Complete flag names for a given command."""
        word_lower = word.lower()
        for flag in self.COMMAND_FLAGS.get(command, []):
            if flag.startswith(word_lower):
                yield Completion(
                    flag,
                    start_position=-len(word),
                    display=flag,
                    display_meta=self._get_flag_description(flag),
                )

    def _complete_config_keys(self, word: str) -> Iterable[Completion]:
        """Complete setting names for the config command."""
        word_lower = word.lower()
        for key in CONFIG_KEYS:
            if key.startswith(word_lower):
                yield Completion(key, start_position=-len(word), display=key)

    def _complete_positions(self, word: str) -> Iterable[Completion]:
        """
        Complete todo positions with the message as a label.
        """
        if self.todos_provider is None:
            return

        try:
            todos = self.todos_provider()
        except Exception:
            # Never let a broken list break typing
            todos = []

        for position, todo in enumerate(todos[:200], start=1):  # cap for responsiveness
            text = str(position)
            if text.startswith(word):
                message = todo.message if len(todo.message) <= 40 else todo.message[:37] + "..."
                meta = f"{message} [done]" if todo.done else message
                yield Completion(
                    text,
                    start_position=-len(word),
                    display=text,
                    display_meta=meta,
                )

    @staticmethod
    def _get_command_description(command: str) -> str:
        """Get description for a command (shown in autocomplete menu)."""
        descriptions = {
            "add": "Add a todo",
            "ls": "List todos",
            "done": "Toggle done",
            "rm": "Delete a todo",
            "clean": "Delete done todos",
            "up": "Move a todo up",
            "down": "Move a todo down",
            "below": "Move a todo below another",
            "dump": "Print the list as JSON",
            "import": "Append todos from a file",
            "load": "Re-read the list from disk",
            "config": "Show or change settings",
            "help": "Show available commands",
            "clear": "Clear the screen",
            "exit": "Exit REPL",
            "quit": "Exit REPL",
        }
        return descriptions.get(command, "")

    @staticmethod
    def _get_flag_description(flag: str) -> str:
        """Get description for a flag (shown in autocomplete menu)."""
        descriptions = {
            "--all": "Include done todos",
            "--json": "Output as JSON",
            "--raw": "Plain text output",
        }
        return descriptions.get(flag, "")


def create_completer(
    todos_provider: Optional[Callable[[], List[Todo]]] = None,
) -> MyndCompleter:
    """
    Create and return a MyndCompleter instance.

    Usage:
        completer = create_completer(lambda: store.todos)
        session = PromptSession(completer=completer)
    """
    return MyndCompleter(todos_provider)
