"""Shared fixtures for chatcmd tests."""

from __future__ import annotations

from typing import Callable, Dict, List

import pytest

from chatcmd.chat_adapters.i_chat_adapter import IChatAdapter
from chatcmd.core.config import FrameworkOptions, PrefixOptions
from chatcmd.core.models import IncomingMessage
from chatcmd.core.router import Router


class DummyChatAdapter(IChatAdapter):
    """Captures replies emitted by the router."""

    def __init__(self) -> None:
        self.messages: List[Dict[str, str]] = []

    async def send_message(self, channel: str, thread_ts: str, text: str) -> None:
        print(f"\n{'='*60}")
        print("CHAT OUTPUT")
        print(f"   Channel: {channel}")
        print(f"   Thread:  {thread_ts}")
        print(f"{'-'*60}")
        print(f"{text}")
        print(f"{'='*60}\n")
        self.messages.append({"channel": channel, "thread_ts": thread_ts, "text": text})


@pytest.fixture
def chat_adapter() -> DummyChatAdapter:
    return DummyChatAdapter()


@pytest.fixture
def make_message() -> Callable[..., IncomingMessage]:
    def _make(content: str, **kwargs) -> IncomingMessage:
        kwargs.setdefault("author_id", "U123")
        kwargs.setdefault("channel_id", "C123")
        kwargs.setdefault("message_id", "1700000000.000100")
        return IncomingMessage(content=content, **kwargs)

    return _make


@pytest.fixture
def make_router(chat_adapter: DummyChatAdapter) -> Callable[..., Router]:
    """Build a router with a "!" prefix bound to the dummy adapter."""

    def _make(commands, prefix_options: PrefixOptions | None = None, **options) -> Router:
        router = Router(
            FrameworkOptions(
                commands=commands,
                prefix_options=prefix_options or PrefixOptions(prefix="!"),
                **options,
            ),
            bot_user_id="UBOT",
        )
        router.bind_adapter(chat_adapter)
        return router

    return _make
