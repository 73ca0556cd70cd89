"""Custom exception hierarchy for chatcmd."""

from __future__ import annotations

from typing import Optional


class ChatCmdError(Exception):
    """Base error type."""


class ConfigError(ChatCmdError):
    pass


class SlotSpecError(ConfigError):
    """Raised when a command declares an impossible parameter layout."""


class SlackError(ChatCmdError):
    pass


class BadArgument(ChatCmdError):
    """Raised by converters when a token cannot be turned into a value."""


class ArgumentParseError(ChatCmdError):
    """Base for the single error surfaced when argument parsing fails.

    ``literal`` is the piece of user input that failed to convert, or None
    when the failure was not tied to a specific token.
    """

    literal: Optional[str] = None


class TooFewArguments(ArgumentParseError):
    def __init__(self) -> None:
        super().__init__("Too few arguments were supplied")


class TooManyArguments(ArgumentParseError):
    def __init__(self) -> None:
        super().__init__("Too many arguments were supplied")


class ArgumentConversionFailed(ArgumentParseError):
    def __init__(self, literal: str, reason: Exception) -> None:
        super().__init__(f"Could not parse `{literal}`: {reason}")
        self.literal = literal
        self.reason = reason


class FlagMismatch(ArgumentParseError):
    def __init__(self, expected: str) -> None:
        super().__init__(f"Must use either `{expected}` or nothing as a modifier")
        self.expected = expected


class CommandInvokeError(ChatCmdError):
    """Wraps an exception raised by a command action."""

    def __init__(self, original: Exception) -> None:
        super().__init__(str(original))
        self.original = original
