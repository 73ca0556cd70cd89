"""Command tree, resolution and dispatch."""

from .catalog import HelpConfiguration, help_command, render_help
from .context import PrefixContext
from .dispatcher import DispatchResult, DispatchStatus, dispatch_message, find_command
from .registry import Command, CommandDefinition, CommandId, SlashCommand, iter_definitions, walk_commands

__all__ = [
    "Command",
    "CommandDefinition",
    "CommandId",
    "DispatchResult",
    "DispatchStatus",
    "HelpConfiguration",
    "PrefixContext",
    "SlashCommand",
    "dispatch_message",
    "find_command",
    "help_command",
    "iter_definitions",
    "render_help",
    "walk_commands",
]
