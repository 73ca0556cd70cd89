"""Typed, backtracking argument parsing for prefix commands."""

from .converters import (
    BoolConverter,
    CallableConverter,
    CodeBlock,
    CodeBlockConverter,
    Converter,
    FloatConverter,
    IntConverter,
    StringConverter,
    UserMentionConverter,
    resolve_converter,
)
from .parser import parse_arguments
from .slots import Slot, SlotKind, flag, optional, repeated, required, rest, validate_slots
from .tokens import ConversionCache, consume, pop_token

__all__ = [
    "BoolConverter",
    "CallableConverter",
    "CodeBlock",
    "CodeBlockConverter",
    "ConversionCache",
    "Converter",
    "FloatConverter",
    "IntConverter",
    "Slot",
    "SlotKind",
    "StringConverter",
    "UserMentionConverter",
    "consume",
    "flag",
    "optional",
    "parse_arguments",
    "pop_token",
    "repeated",
    "required",
    "resolve_converter",
    "rest",
    "validate_slots",
]
