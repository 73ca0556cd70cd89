"""Decides whether a message starts with one of the accepted command prefixes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .models import IncomingMessage, LiteralPrefix, PartialContext, PatternPrefix, Prefix, PrefixMatch

if TYPE_CHECKING:
    from .config import PrefixOptions


def match_additional_prefix(prefix: Prefix, content: str) -> Optional[PrefixMatch]:
    """Match a single literal or pattern prefix against the message start."""
    if isinstance(prefix, LiteralPrefix):
        if content.startswith(prefix.value):
            return PrefixMatch(prefix.value, content[len(prefix.value) :])
        return None
    if isinstance(prefix, PatternPrefix):
        match = prefix.pattern.match(content)
        if match is None:
            return None
        return PrefixMatch(content[: match.end()], content[match.end() :])
    raise TypeError(f"Unsupported prefix entry: {prefix!r}")


def strip_mention(content: str, bot_user_id: str) -> Optional[PrefixMatch]:
    """Strip a leading ``<@ID>`` or ``<@!ID>`` mention of the bot."""
    if not content.startswith("<@"):
        return None
    rest = content[2:].lstrip("!")
    if not rest.startswith(bot_user_id):
        return None
    rest = rest[len(bot_user_id) :]
    if not rest.startswith(">"):
        return None
    rest = rest[1:]
    return PrefixMatch(content[: len(content) - len(rest)], rest)


async def strip_prefix(
    options: PrefixOptions,
    message: IncomingMessage,
    data: Any = None,
    bot_user_id: Optional[str] = None,
) -> Optional[PrefixMatch]:
    """Return the matched prefix and the rest of the message, or None.

    Strategies are tried in a fixed order: dynamic prefix, fixed prefix,
    additional prefixes, stripped dynamic prefix, then the bot mention.
    Ordinary chat messages end up here all the time, so a miss is silent.
    """
    content = message.content

    if options.dynamic_prefix is not None:
        prefix = await options.dynamic_prefix(PartialContext.from_message(message, data))
        if prefix is not None and content.startswith(prefix):
            return PrefixMatch(prefix, content[len(prefix) :])

    if options.prefix is not None and content.startswith(options.prefix):
        return PrefixMatch(options.prefix, content[len(options.prefix) :])

    for entry in options.additional_prefixes:
        matched = match_additional_prefix(entry, content)
        if matched is not None:
            return matched

    if options.stripped_dynamic_prefix is not None:
        stripped = await options.stripped_dynamic_prefix(message, data)
        if stripped is not None:
            return PrefixMatch(*stripped)

    if options.mention_as_prefix and bot_user_id:
        return strip_mention(content, bot_user_id)

    return None
