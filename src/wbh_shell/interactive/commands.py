from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .tokenizer import split_first_word


class CommandKind(Enum):
    SELECT = "select"
    DELETE = "delete"
    SEND = "send"
    SETNAME = "setname"
    HELP = "help"
    QUIT = "quit"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Command:
    """An entry of the shell's command table."""

    name: str
    help_text: str

    @property
    def kind(self) -> CommandKind:
        return CommandKind(self.name)


# Shown by `help` in this order.
COMMANDS: Tuple[Command, ...] = (
    Command("select", "Connects to a webhook"),
    Command("delete", "Deletes the selected webhook"),
    Command("send", "Sends a message to the selected webhook"),
    Command("setname", "Sets the name of the selected webhook"),
    Command("help", "You're looking at it"),
    Command("quit", "Quit the program"),
)

_COMMANDS_BY_NAME = {command.name: command for command in COMMANDS}


def lookup_command(word: str) -> CommandKind:
    """Resolves a typed command word, ignoring case."""
    command = _COMMANDS_BY_NAME.get(word.lower())
    return command.kind if command else CommandKind.UNKNOWN


@dataclass(frozen=True)
class ParsedCommand:
    """A single input line, resolved to the command it invokes."""

    kind: CommandKind
    word: str
    argument: str


def parse_command(line: str) -> ParsedCommand:
    word, argument = split_first_word(line)
    return ParsedCommand(kind=lookup_command(word), word=word, argument=argument)
