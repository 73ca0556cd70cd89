"""Domain models shared by the prefix resolver and the dispatcher."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Pattern, Union


@dataclass(frozen=True)
class IncomingMessage:
    """A chat message as seen by the dispatcher, independent of the platform."""

    content: str
    author_id: str
    channel_id: str
    guild_id: Optional[str] = None
    thread_id: Optional[str] = None
    message_id: Optional[str] = None


@dataclass(frozen=True)
class PartialContext:
    """Read-only context available before a command has been resolved."""

    channel_id: str
    author_id: str
    guild_id: Optional[str] = None
    data: Any = None

    @classmethod
    def from_message(cls, message: IncomingMessage, data: Any = None) -> "PartialContext":
        return cls(
            channel_id=message.channel_id,
            author_id=message.author_id,
            guild_id=message.guild_id,
            data=data,
        )


@dataclass(frozen=True)
class LiteralPrefix:
    value: str


@dataclass(frozen=True)
class PatternPrefix:
    """A prefix matched by a regular expression anchored at the message start."""

    pattern: Pattern[str] = field(compare=False)

    @classmethod
    def compile(cls, expression: str) -> "PatternPrefix":
        return cls(pattern=re.compile(expression))


Prefix = Union[LiteralPrefix, PatternPrefix]


class PrefixMatch(NamedTuple):
    prefix: str
    remainder: str
