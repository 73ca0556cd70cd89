"""Tests for the built-in argument converters."""

from __future__ import annotations

import pytest

from chatcmd.core.arguments import (
    BoolConverter,
    CallableConverter,
    CodeBlock,
    CodeBlockConverter,
    FloatConverter,
    IntConverter,
    StringConverter,
    UserMentionConverter,
    resolve_converter,
)
from chatcmd.core.errors import BadArgument, SlotSpecError


class TestScalarConverters:
    @pytest.mark.asyncio
    async def test_int_bounds(self):
        converter = IntConverter(min_value=1, max_value=10)
        assert await converter.convert(None, "7") == 7
        with pytest.raises(BadArgument):
            await converter.convert(None, "0")
        with pytest.raises(BadArgument):
            await converter.convert(None, "11")

    @pytest.mark.asyncio
    async def test_float(self):
        assert await FloatConverter().convert(None, "2.5") == 2.5
        with pytest.raises(BadArgument):
            await FloatConverter().convert(None, "two")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text, expected",
        [("yes", True), ("ON", True), ("1", True), ("no", False), ("Disabled", False)],
    )
    async def test_bool_words(self, text, expected):
        assert await BoolConverter().convert(None, text) is expected

    @pytest.mark.asyncio
    async def test_bool_rejects_other_words(self):
        with pytest.raises(BadArgument):
            await BoolConverter().convert(None, "maybe")


class TestCodeBlockConverter:
    @pytest.mark.asyncio
    async def test_fenced_with_language(self):
        block = await CodeBlockConverter().convert(None, "```py\nprint(1)\n```")
        assert block == CodeBlock(code="print(1)", language="py")

    @pytest.mark.asyncio
    async def test_fenced_without_language(self):
        block = await CodeBlockConverter().convert(None, "```x = 1```")
        assert block == CodeBlock(code="x = 1")

    @pytest.mark.asyncio
    async def test_inline(self):
        assert await CodeBlockConverter().convert(None, "`ls -la`") == CodeBlock(code="ls -la")

    @pytest.mark.asyncio
    async def test_double_backtick_inline(self):
        assert await CodeBlockConverter().convert(None, "``a `b` c``") == CodeBlock(code="a `b` c")
        assert await CodeBlockConverter().convert(None, "`` `x` ``") == CodeBlock(code="`x`")

    @pytest.mark.asyncio
    async def test_bare_backticks_rejected(self):
        with pytest.raises(BadArgument):
            await CodeBlockConverter().convert(None, "``")

    @pytest.mark.asyncio
    async def test_plain_text_rejected(self):
        with pytest.raises(BadArgument):
            await CodeBlockConverter().convert(None, "ls")


class TestUserMentionConverter:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["<@U024BE7LH>", "<@!U024BE7LH>", "U024BE7LH"])
    async def test_accepted_forms(self, text):
        assert await UserMentionConverter().convert(None, text) == "U024BE7LH"

    @pytest.mark.asyncio
    async def test_rejects_words(self):
        with pytest.raises(BadArgument):
            await UserMentionConverter().convert(None, "bob")


class TestResolveConverter:
    def test_builtin_types(self):
        assert isinstance(resolve_converter(str), StringConverter)
        assert isinstance(resolve_converter(int), IntConverter)
        assert isinstance(resolve_converter(CodeBlock), CodeBlockConverter)

    def test_converter_class_is_instantiated(self):
        assert isinstance(resolve_converter(UserMentionConverter), UserMentionConverter)

    def test_instance_passes_through(self):
        converter = IntConverter(min_value=0)
        assert resolve_converter(converter) is converter

    @pytest.mark.asyncio
    async def test_plain_callable(self):
        converter = resolve_converter(str.upper)
        assert isinstance(converter, CallableConverter)
        assert await converter.convert(None, "loud") == "LOUD"

    @pytest.mark.asyncio
    async def test_async_callable_errors_become_bad_argument(self):
        async def lookup(text: str) -> str:
            raise KeyError(text)

        with pytest.raises(BadArgument):
            await resolve_converter(lookup).convert(None, "missing")

    def test_unknown_spec(self):
        with pytest.raises(SlotSpecError):
            resolve_converter(42)
