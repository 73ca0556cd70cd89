"""Command tree definitions.

A command definition is one ``CommandId`` record. Each surface the command is
exposed on (text prefix, slash command) is a thin facade pointing at that
record, so two facades belong to the same command exactly when they share
the record, whatever their names are.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..arguments.slots import Slot, validate_slots

CommandAction = Callable[..., Awaitable[Any]]


@dataclass(eq=False)
class CommandId:
    """Metadata shared by every facade of one command."""

    inline_help: Optional[str] = None
    multiline_help: Optional[str] = None
    category: Optional[str] = None
    hide_in_help: bool = False


@dataclass(frozen=True, eq=False)
class Command:
    """A text command: its names, subcommands, parameters and action.

    The action is awaited as ``action(ctx, *arguments)`` with one argument
    per parameter slot.
    """

    name: str
    action: Optional[CommandAction] = None
    aliases: Tuple[str, ...] = ()
    subcommands: Tuple["Command", ...] = ()
    params: Tuple[Slot, ...] = ()
    id: CommandId = field(default_factory=CommandId)
    invoke_on_edit: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "subcommands", tuple(self.subcommands))
        object.__setattr__(self, "params", validate_slots(self.params))

    @property
    def all_names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def inline_help(self) -> Optional[str]:
        return self.id.inline_help

    def usage(self, prefix: str = "") -> str:
        return " ".join([f"{prefix}{self.name}", *(slot.usage() for slot in self.params)])

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, aliases={self.aliases!r})"


@dataclass(frozen=True, eq=False)
class SlashCommand:
    name: str
    id: CommandId


@dataclass
class CommandDefinition:
    id: CommandId
    prefix: Optional[Command] = None
    slash: Optional[SlashCommand] = None

    @property
    def name(self) -> str:
        facade = self.prefix or self.slash
        return facade.name if facade else ""


def iter_definitions(
    prefix_commands: Iterable[Command],
    slash_commands: Iterable[SlashCommand] = (),
) -> List[CommandDefinition]:
    """Group top-level facades by the command they belong to, in first-seen order."""
    definitions: Dict[CommandId, CommandDefinition] = {}
    for command in prefix_commands:
        definitions.setdefault(command.id, CommandDefinition(id=command.id)).prefix = command
    for slash in slash_commands:
        definitions.setdefault(slash.id, CommandDefinition(id=slash.id)).slash = slash
    return list(definitions.values())


def walk_commands(commands: Sequence[Command]) -> Iterable[Command]:
    """Yield every command in the tree, parents before their subcommands."""
    for command in commands:
        yield command
        yield from walk_commands(command.subcommands)
