"""Resolves prefixed messages to commands and runs them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple

from ..arguments.parser import parse_arguments
from ..errors import ArgumentParseError, ChatCmdError, CommandInvokeError
from ..models import IncomingMessage, PartialContext
from ..prefix import strip_prefix
from .context import PrefixContext
from .registry import Command

if TYPE_CHECKING:
    from ..router import Router

LOGGER = logging.getLogger(__name__)

_FIRST_WHITESPACE = re.compile(r"\s")


class DispatchStatus(str, Enum):
    INVOKED = "invoked"
    NO_PREFIX = "no_prefix"
    NO_COMMAND = "no_command"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass
class DispatchResult:
    status: DispatchStatus
    command: Optional[Command] = None
    context: Optional[PrefixContext] = None
    arguments: Tuple[Any, ...] = ()
    error: Optional[ChatCmdError] = None

    @property
    def invoked(self) -> bool:
        return self.status is DispatchStatus.INVOKED


def find_command(
    commands: Sequence[Command],
    remaining_message: str,
    case_insensitive: bool = False,
) -> Optional[Tuple[Command, str, str]]:
    """Find the most specific command named by the start of ``remaining_message``.

    Returns ``(command, invoked_name, args)`` where ``invoked_name`` is the
    name exactly as typed. Subcommands win over being read as an argument of
    their parent.
    """
    parts = _FIRST_WHITESPACE.split(remaining_message, maxsplit=1)
    command_name = parts[0]
    remaining = parts[1].lstrip() if len(parts) > 1 else ""

    for command in commands:
        if not any(_same_name(name, command_name, case_insensitive) for name in command.all_names):
            continue
        deeper = find_command(command.subcommands, remaining, case_insensitive)
        if deeper is not None:
            return deeper
        return command, command_name, remaining

    return None


def _same_name(name: str, typed: str, case_insensitive: bool) -> bool:
    if case_insensitive:
        return name.lower() == typed.lower()
    return name == typed


async def dispatch_message(
    router: Router,
    message: IncomingMessage,
    *,
    triggered_by_edit: bool = False,
    previously_tracked: bool = False,
) -> DispatchResult:
    """Run the command invoked by ``message``, if any.

    Non-command messages come back as ``NO_PREFIX``/``NO_COMMAND``/``IGNORED``.
    Argument and action failures come back as ``FAILED`` with the error and
    the command attached; reporting them is up to the caller.
    """
    options = router.options
    prefix_options = options.prefix_options

    matched = await strip_prefix(prefix_options, message, router.data, router.bot_user_id)
    if matched is None:
        return DispatchResult(DispatchStatus.NO_PREFIX)
    content = matched.remainder.lstrip()

    if (
        router.bot_user_id is not None
        and message.author_id == router.bot_user_id
        and not prefix_options.execute_self_messages
    ):
        return DispatchResult(DispatchStatus.IGNORED)

    found = find_command(options.commands, content, prefix_options.case_insensitive_commands)
    if found is None:
        return DispatchResult(DispatchStatus.NO_COMMAND)
    command, invoked_name, args = found
    if command.action is None:
        return DispatchResult(DispatchStatus.NO_COMMAND, command=command)

    should_run_on_edit = command.invoke_on_edit or (
        not previously_tracked and prefix_options.execute_untracked_edits
    )
    if triggered_by_edit and not should_run_on_edit:
        LOGGER.debug("Not re-running %s for an edited message", command.name)
        return DispatchResult(DispatchStatus.IGNORED, command=command)

    ctx = PrefixContext(
        message=message,
        prefix=matched.prefix,
        invoked_command_name=invoked_name,
        command=command,
        router=router,
        data=router.data,
    )

    try:
        arguments = await parse_arguments(
            command.params, args, PartialContext.from_message(message, router.data)
        )
    except ArgumentParseError as exc:
        LOGGER.debug("Invalid arguments for %s: %s", command.name, exc)
        return DispatchResult(DispatchStatus.FAILED, command=command, context=ctx, error=exc)

    LOGGER.info(
        "Running command %s in channel %s for %s", command.name, message.channel_id, message.author_id
    )
    if options.pre_command is not None:
        await options.pre_command(ctx)

    try:
        await command.action(ctx, *arguments)
    except Exception as exc:
        result = DispatchResult(
            DispatchStatus.FAILED,
            command=command,
            context=ctx,
            arguments=arguments,
            error=CommandInvokeError(exc),
        )
    else:
        result = DispatchResult(
            DispatchStatus.INVOKED, command=command, context=ctx, arguments=arguments
        )

    if options.post_command is not None:
        await options.post_command(ctx)
    return result
