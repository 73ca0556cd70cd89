"""Shared data passed to command actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..models import IncomingMessage, PartialContext
from .registry import Command

if TYPE_CHECKING:
    from ..router import Router


@dataclass(frozen=True)
class PrefixContext:
    message: IncomingMessage
    prefix: str
    invoked_command_name: str
    command: Command
    router: Router
    data: Any = None

    @property
    def channel_id(self) -> str:
        return self.message.channel_id

    @property
    def author_id(self) -> str:
        return self.message.author_id

    @property
    def guild_id(self) -> Optional[str]:
        return self.message.guild_id

    def partial(self) -> PartialContext:
        return PartialContext.from_message(self.message, self.data)

    async def reply(self, text: str) -> Optional[str]:
        """Reply in the invoking message's thread."""
        thread_id = self.message.thread_id or self.message.message_id or ""
        return await self.router.send_message(self.message.channel_id, thread_id, text)
