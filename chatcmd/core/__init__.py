"""Core command resolution and dispatch for chatcmd."""

from .config import Config, FrameworkOptions, PrefixOptions, load_config
from .errors import (
    ArgumentConversionFailed,
    ArgumentParseError,
    BadArgument,
    ChatCmdError,
    CommandInvokeError,
    ConfigError,
    FlagMismatch,
    SlackError,
    SlotSpecError,
    TooFewArguments,
    TooManyArguments,
)
from .models import (
    IncomingMessage,
    LiteralPrefix,
    PartialContext,
    PatternPrefix,
    PrefixMatch,
)
from .prefix import strip_prefix
from .router import Router, default_on_error

__all__ = [
    "Config",
    "FrameworkOptions",
    "PrefixOptions",
    "load_config",
    "ArgumentConversionFailed",
    "ArgumentParseError",
    "BadArgument",
    "ChatCmdError",
    "CommandInvokeError",
    "ConfigError",
    "FlagMismatch",
    "SlackError",
    "SlotSpecError",
    "TooFewArguments",
    "TooManyArguments",
    "IncomingMessage",
    "LiteralPrefix",
    "PartialContext",
    "PatternPrefix",
    "PrefixMatch",
    "strip_prefix",
    "Router",
    "default_on_error",
]
