"""Tests for single-token consumption."""

from __future__ import annotations

import pytest

from chatcmd.core.arguments import ConversionCache, IntConverter, consume, pop_token
from chatcmd.core.errors import ArgumentConversionFailed, TooFewArguments


class TestPopToken:
    def test_plain_word(self):
        assert pop_token("hello world") == ("world", "hello")

    def test_leading_and_separating_whitespace(self):
        assert pop_token("   hello \t  world  ") == ("world  ", "hello")

    def test_last_word(self):
        assert pop_token("hello") == ("", "hello")

    def test_empty_input(self):
        with pytest.raises(TooFewArguments):
            pop_token("   ")

    def test_quotes_group_words(self):
        assert pop_token('"two words" three') == ("three", "two words")

    def test_quotes_inside_word(self):
        assert pop_token('say"hi there"! next') == ("next", "sayhi there!")

    def test_backslash_escapes(self):
        assert pop_token(r'\"quoted\" next') == ("next", '"quoted"')
        assert pop_token(r"one\ word next") == ("next", "one word")

    def test_unterminated_quote_runs_to_end(self):
        assert pop_token('"never closed') == ("", "never closed")

    def test_inline_code_kept_whole(self):
        assert pop_token("`a b` c") == ("c", "`a b`")

    def test_fenced_code_kept_whole(self):
        text = "```py\nprint('hi there')\n``` after"
        assert pop_token(text) == ("after", "```py\nprint('hi there')\n```")

    def test_unclosed_backtick_is_a_normal_word(self):
        assert pop_token("`oops more") == ("more", "`oops")

    def test_double_backtick_span_holds_single_backticks(self):
        assert pop_token("``a `b` c`` tail") == ("tail", "``a `b` c``")

    def test_span_closes_on_run_of_same_length(self):
        assert pop_token("`a ``b`` c` d") == ("d", "`a ``b`` c`")


class TestConsume:
    @pytest.mark.asyncio
    async def test_converts_token(self):
        assert await consume(IntConverter(), " 42 rest") == ("rest", 42)

    @pytest.mark.asyncio
    async def test_conversion_failure(self):
        with pytest.raises(ArgumentConversionFailed) as exc_info:
            await consume(IntConverter(), "forty two")
        assert exc_info.value.literal == "forty"
        assert "Could not parse `forty`" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_cache_replays_failure(self):
        cache = ConversionCache()
        converter = IntConverter()
        for _ in range(2):
            with pytest.raises(ArgumentConversionFailed):
                await consume(converter, "x", cache=cache)
