"""Per-type converters turning a single argument token into a value."""

from __future__ import annotations

import abc
import inspect
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..errors import BadArgument, SlotSpecError
from ..models import PartialContext

MENTION_PATTERN = re.compile(r"<@!?([A-Za-z0-9]+)>")
BARE_USER_ID_PATTERN = re.compile(r"[0-9]{5,}|[UW][A-Z0-9]{5,}")

_TRUE_WORDS = frozenset({"true", "yes", "y", "on", "1", "enable", "enabled"})
_FALSE_WORDS = frozenset({"false", "no", "n", "off", "0", "disable", "disabled"})


class Converter(abc.ABC):
    """Converts one piece of user input into a typed value.

    Converters must not have side effects: the argument parser may try the
    same text against several slots while it looks for a split that works.
    """

    @abc.abstractmethod
    async def convert(self, ctx: Optional[PartialContext], argument: str) -> Any:
        """Return the converted value or raise ``BadArgument``."""


class StringConverter(Converter):
    async def convert(self, ctx: Optional[PartialContext], argument: str) -> str:
        return argument


@dataclass(frozen=True)
class IntConverter(Converter):
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    async def convert(self, ctx: Optional[PartialContext], argument: str) -> int:
        try:
            value = int(argument)
        except ValueError as exc:
            raise BadArgument(f"`{argument}` is not a whole number") from exc
        if self.min_value is not None and value < self.min_value:
            raise BadArgument(f"{value} is smaller than {self.min_value}")
        if self.max_value is not None and value > self.max_value:
            raise BadArgument(f"{value} is larger than {self.max_value}")
        return value


class FloatConverter(Converter):
    async def convert(self, ctx: Optional[PartialContext], argument: str) -> float:
        try:
            return float(argument)
        except ValueError as exc:
            raise BadArgument(f"`{argument}` is not a number") from exc


class BoolConverter(Converter):
    async def convert(self, ctx: Optional[PartialContext], argument: str) -> bool:
        lowered = argument.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise BadArgument(f"`{argument}` is not a yes/no value")


@dataclass(frozen=True)
class CodeBlock:
    code: str
    language: Optional[str] = None


class CodeBlockConverter(Converter):
    """Accepts ```` ```lang\\ncode``` ```` fenced blocks and single or double backtick inline code."""

    async def convert(self, ctx: Optional[PartialContext], argument: str) -> CodeBlock:
        if len(argument) >= 6 and argument.startswith("```") and argument.endswith("```"):
            body = argument[3:-3]
            first_line, newline, rest = body.partition("\n")
            if newline and first_line and not any(char.isspace() for char in first_line):
                return CodeBlock(code=rest.rstrip("\n"), language=first_line)
            return CodeBlock(code=body.strip("\n"))
        ticks = len(argument) - len(argument.lstrip("`"))
        if 0 < ticks < 3 and len(argument) > 2 * ticks and argument.endswith("`" * ticks):
            code = argument[ticks:-ticks]
            # Double-backtick spans may pad the code with one space on each side.
            if ticks > 1 and code.startswith(" ") and code.endswith(" ") and code.strip():
                code = code[1:-1]
            return CodeBlock(code=code)
        raise BadArgument(
            "Missing code block. Please use ```language\ncode here\n``` or `code here`"
        )


class UserMentionConverter(Converter):
    """Resolves `<@ID>`, `<@!ID>` or a bare user ID to the ID string."""

    async def convert(self, ctx: Optional[PartialContext], argument: str) -> str:
        match = MENTION_PATTERN.fullmatch(argument)
        if match:
            return match.group(1)
        if BARE_USER_ID_PATTERN.fullmatch(argument):
            return argument
        raise BadArgument(f"`{argument}` is not a user mention")


class CallableConverter(Converter):
    """Adapts a plain (optionally async) callable taking the raw string."""

    def __init__(self, func: Callable[[str], Any]) -> None:
        self._func = func

    async def convert(self, ctx: Optional[PartialContext], argument: str) -> Any:
        try:
            value = self._func(argument)
            if inspect.isawaitable(value):
                value = await value
        except BadArgument:
            raise
        except Exception as exc:
            raise BadArgument(str(exc) or f"`{argument}` is not valid") from exc
        return value

    def __repr__(self) -> str:
        return f"CallableConverter({self._func!r})"


_BUILTIN_CONVERTERS: Dict[type, Converter] = {
    str: StringConverter(),
    int: IntConverter(),
    float: FloatConverter(),
    bool: BoolConverter(),
    CodeBlock: CodeBlockConverter(),
}


def resolve_converter(spec: Any) -> Converter:
    """Return the converter used for a parameter declared as ``spec``."""
    if isinstance(spec, Converter):
        return spec
    if isinstance(spec, type):
        if issubclass(spec, Converter):
            return spec()
        if spec in _BUILTIN_CONVERTERS:
            return _BUILTIN_CONVERTERS[spec]
    if callable(spec):
        return CallableConverter(spec)
    raise SlotSpecError(f"Don't know how to convert arguments to {spec!r}")
