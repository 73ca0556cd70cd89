"""Built-in help command: an overview of all commands or help for one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from ..arguments.slots import optional
from .context import PrefixContext
from .registry import Command, CommandDefinition, CommandId, iter_definitions

if TYPE_CHECKING:
    from ..router import Router

DEFAULT_CATEGORY = "Commands"
NAME_COLUMN_WIDTH = 12


@dataclass(frozen=True)
class HelpConfiguration:
    """Extra text displayed at the bottom of the overview, e.g. bot-specific tips."""

    extra_text_at_bottom: str = ""


async def render_help(
    router: Router,
    ctx: PrefixContext,
    command_name: Optional[str] = None,
    config: Optional[HelpConfiguration] = None,
) -> str:
    config = config or HelpConfiguration()
    if command_name:
        return _help_single_command(router, command_name)
    return await _help_all_commands(router, ctx, config)


def _help_single_command(router: Router, command_name: str) -> str:
    wanted = command_name.lower()
    for command in router.options.commands:
        if command.name.lower() != wanted:
            continue
        if command.id.multiline_help:
            return command.id.multiline_help
        return command.inline_help or "No help available"
    return f"No such command `{command_name}`"


async def _help_all_commands(router: Router, ctx: PrefixContext, config: HelpConfiguration) -> str:
    categories: Dict[Optional[str], List[CommandDefinition]] = {}
    for definition in iter_definitions(router.options.commands, router.options.slash_commands):
        categories.setdefault(definition.id.category, []).append(definition)

    menu = "```\n"
    for category, definitions in categories.items():
        menu += f"{category or DEFAULT_CATEGORY}:\n"
        for definition in definitions:
            if definition.id.hide_in_help:
                continue
            prefix = await _display_prefix(router, ctx, definition)
            if prefix is None:
                continue
            padding = max(0, NAME_COLUMN_WIDTH - len(prefix) - len(definition.name)) + 1
            menu += f"  {prefix}{definition.name}{' ' * padding}{definition.id.inline_help or ''}\n"

    menu += "\n"
    menu += config.extra_text_at_bottom
    menu += "\n```"
    return menu


async def _display_prefix(
    router: Router, ctx: PrefixContext, definition: CommandDefinition
) -> Optional[str]:
    """Prefix shown before the name, or None when the command cannot be invoked."""
    if definition.slash is not None:
        return "/"
    if definition.prefix is None or definition.prefix.action is None:
        return None
    prefix_options = router.options.prefix_options
    if prefix_options.prefix is not None:
        return prefix_options.prefix
    if prefix_options.dynamic_prefix is not None:
        return await prefix_options.dynamic_prefix(ctx.partial()) or ""
    return ""


def help_command(
    config: Optional[HelpConfiguration] = None,
    *,
    name: str = "help",
    category: Optional[str] = None,
) -> Command:
    """Build a ready-to-register `help [command]` command."""

    async def _help(ctx: PrefixContext, command_name: Optional[str]) -> None:
        await ctx.reply(await render_help(ctx.router, ctx, command_name, config))

    return Command(
        name=name,
        action=_help,
        params=(optional(str, name="command"),),
        id=CommandId(
            inline_help="Show this menu",
            multiline_help="Show all commands, or `help <command>` for help about one command.",
            category=category,
        ),
        invoke_on_edit=True,
    )
