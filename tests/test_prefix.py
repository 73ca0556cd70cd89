"""Tests for prefix stripping strategies."""

from __future__ import annotations

import pytest

from chatcmd.core.config import PrefixOptions
from chatcmd.core.models import IncomingMessage, LiteralPrefix, PatternPrefix, PrefixMatch
from chatcmd.core.prefix import match_additional_prefix, strip_mention, strip_prefix


def _message(content: str) -> IncomingMessage:
    return IncomingMessage(content=content, author_id="U1", channel_id="C1", guild_id="T1")


class TestStripPrefix:
    @pytest.mark.asyncio
    async def test_fixed_prefix(self):
        result = await strip_prefix(PrefixOptions(prefix="!"), _message("!ping"))
        assert result == PrefixMatch("!", "ping")

    @pytest.mark.asyncio
    async def test_plain_chat_is_not_a_command(self):
        assert await strip_prefix(PrefixOptions(prefix="!"), _message("hello there")) is None

    @pytest.mark.asyncio
    async def test_dynamic_prefix_runs_first(self):
        seen = []

        async def per_channel(ctx):
            seen.append((ctx.channel_id, ctx.author_id, ctx.guild_id, ctx.data))
            return "?"

        options = PrefixOptions(prefix="?!", dynamic_prefix=per_channel)
        result = await strip_prefix(options, _message("?!ping"), data="state")
        assert result == PrefixMatch("?", "!ping")
        assert seen == [("C1", "U1", "T1", "state")]

    @pytest.mark.asyncio
    async def test_dynamic_prefix_miss_falls_through(self):
        async def nothing(ctx):
            return None

        options = PrefixOptions(prefix="!", dynamic_prefix=nothing)
        assert await strip_prefix(options, _message("!ping")) == PrefixMatch("!", "ping")

    @pytest.mark.asyncio
    async def test_additional_prefixes_in_order(self):
        options = PrefixOptions(
            additional_prefixes=[LiteralPrefix("hey bot,"), PatternPrefix.compile(r"(?i)yo+\s*")]
        )
        assert await strip_prefix(options, _message("hey bot, ping")) == PrefixMatch("hey bot,", " ping")
        assert await strip_prefix(options, _message("YOOO ping")) == PrefixMatch("YOOO ", "ping")

    @pytest.mark.asyncio
    async def test_pattern_must_match_at_start(self):
        options = PrefixOptions(additional_prefixes=[PatternPrefix.compile(r"yo+")])
        assert await strip_prefix(options, _message("well yo ping")) is None

    @pytest.mark.asyncio
    async def test_stripped_dynamic_prefix(self):
        async def strip_hash(message, data):
            if message.content.startswith("#"):
                return "#", message.content[1:]
            return None

        options = PrefixOptions(stripped_dynamic_prefix=strip_hash)
        assert await strip_prefix(options, _message("#ping")) == PrefixMatch("#", "ping")
        assert await strip_prefix(options, _message("ping")) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["<@UBOT> ping", "<@!UBOT> ping"])
    async def test_mention_as_prefix(self, content):
        result = await strip_prefix(PrefixOptions(), _message(content), bot_user_id="UBOT")
        assert result is not None
        assert result.remainder == " ping"
        assert result.prefix == content[: -len(" ping")]

    @pytest.mark.asyncio
    async def test_mention_disabled_or_unknown_bot(self):
        disabled = PrefixOptions(mention_as_prefix=False)
        assert await strip_prefix(disabled, _message("<@UBOT> ping"), bot_user_id="UBOT") is None
        assert await strip_prefix(PrefixOptions(), _message("<@UBOT> ping")) is None

    @pytest.mark.asyncio
    async def test_fixed_prefix_beats_mention(self):
        options = PrefixOptions(prefix="<@")
        result = await strip_prefix(options, _message("<@UBOT> ping"), bot_user_id="UBOT")
        assert result == PrefixMatch("<@", "UBOT> ping")


class TestHelpers:
    def test_strip_mention_other_user(self):
        assert strip_mention("<@UOTHER> ping", "UBOT") is None

    def test_strip_mention_needs_closing_bracket(self):
        assert strip_mention("<@UBOTX> ping", "UBOT") is None

    def test_literal_prefix(self):
        assert match_additional_prefix(LiteralPrefix("$"), "$x") == PrefixMatch("$", "x")
        assert match_additional_prefix(LiteralPrefix("$"), "x$") is None
