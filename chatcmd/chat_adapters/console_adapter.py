"""Adapter that prints replies to a stream, used by `chatcmd try`."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .i_chat_adapter import IChatAdapter


class ConsoleAdapter(IChatAdapter):
    platform = "console"

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout

    async def send_message(self, channel: str, thread_ts: str, text: str) -> None:
        print(text, file=self._stream)
