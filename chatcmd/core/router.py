"""Routes chat events to the command dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..chat_adapters.i_chat_adapter import IChatAdapter
from .commands.context import PrefixContext
from .commands.dispatcher import DispatchResult, DispatchStatus, dispatch_message
from .config import FrameworkOptions
from .errors import ArgumentParseError, ChatCmdError, CommandInvokeError
from .models import IncomingMessage

LOGGER = logging.getLogger(__name__)


async def default_on_error(error: ChatCmdError, ctx: PrefixContext) -> None:
    """Log the failure and explain it to the user."""
    if isinstance(error, ArgumentParseError):
        usage = ctx.command.usage(ctx.prefix)
        await ctx.reply(f"{error}\nUsage: `{usage}`")
        return
    if isinstance(error, CommandInvokeError):
        LOGGER.error(
            "Command %s failed in channel %s",
            ctx.command.name,
            ctx.channel_id,
            exc_info=error.original,
        )
        await ctx.reply(f"Command `{ctx.invoked_command_name}` failed. Check the bot logs for details.")
        return
    LOGGER.error("Unhandled error in command %s: %s", ctx.command.name, error)


class Router:
    """Central orchestrator translating chat messages into command invocations."""

    def __init__(
        self,
        options: FrameworkOptions,
        *,
        data: Any = None,
        bot_user_id: Optional[str] = None,
    ) -> None:
        self._options = options
        self._data = data
        self.bot_user_id = bot_user_id
        self._chat_adapter: Optional[IChatAdapter] = None

    @property
    def options(self) -> FrameworkOptions:
        return self._options

    @property
    def data(self) -> Any:
        return self._data

    def bind_adapter(self, adapter: IChatAdapter) -> None:
        """Attach the chat adapter so the router can send replies."""

        self._chat_adapter = adapter
        LOGGER.debug("Bound %s adapter", adapter.platform)

    async def handle_message(self, event: Dict[str, Any]) -> DispatchResult:
        """Dispatch a Slack-style message event (plain or ``message_changed``)."""
        triggered_by_edit = event.get("subtype") == "message_changed"
        payload = (event.get("message") or {}) if triggered_by_edit else event

        channel_id = event.get("channel")
        if not channel_id:
            LOGGER.debug("Ignoring chat event missing channel")
            return DispatchResult(DispatchStatus.IGNORED)

        if triggered_by_edit:
            previous = event.get("previous_message") or {}
            if "text" in previous and previous.get("text") == payload.get("text"):
                # Unfurls and attachment updates arrive as edits with the same text.
                LOGGER.debug("Ignoring message_changed event without a text change")
                return DispatchResult(DispatchStatus.IGNORED)

        message = IncomingMessage(
            content=payload.get("text") or "",
            author_id=payload.get("user") or "",
            channel_id=channel_id,
            guild_id=payload.get("team") or event.get("team"),
            thread_id=payload.get("thread_ts"),
            message_id=payload.get("ts"),
        )
        return await self.dispatch(message, triggered_by_edit=triggered_by_edit)

    async def dispatch(
        self,
        message: IncomingMessage,
        *,
        triggered_by_edit: bool = False,
        previously_tracked: bool = False,
    ) -> DispatchResult:
        result = await dispatch_message(
            self,
            message,
            triggered_by_edit=triggered_by_edit,
            previously_tracked=previously_tracked,
        )
        if result.status is DispatchStatus.FAILED and result.context is not None:
            on_error = self._options.on_error or default_on_error
            await on_error(result.error, result.context)
        return result

    async def send_message(
        self, channel: str, thread_ts: str, text: str
    ) -> Optional[str]:
        if not self._chat_adapter:
            LOGGER.warning("Chat adapter not bound; dropping message: %s", text)
            return None
        return await self._chat_adapter.send_message(
            channel=channel, thread_ts=thread_ts, text=text
        )
