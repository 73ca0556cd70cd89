"""Interface between the router and a chat platform."""

from __future__ import annotations

import abc
from typing import Optional


class IChatAdapter(abc.ABC):
    """A chat platform connection that delivers messages to a router and posts replies."""

    platform: str = "chat"

    @abc.abstractmethod
    async def send_message(
        self, channel: str, thread_ts: str, text: str
    ) -> Optional[str]:
        """Post ``text`` to ``channel``, threaded under ``thread_ts`` when it is non-empty.

        Returns:
            The new message's platform ID, or None if the platform has none.
        """

    async def start(self) -> None:
        """Begin delivering incoming messages. Adapters with no listener return at once."""

    async def stop(self) -> None:
        """Stop delivering messages and release connections."""
