"""Token consumption shared by every argument slot.

A token is one whitespace-delimited word of the argument string. Double
quotes group words (``"two words"``) and a backslash escapes the next
character. Text opening with a run of backticks (single, double or a triple
fence) stays one token up to the next run of the same length,
whitespace and backticks included, so code block converters see the whole
block.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple

from ..errors import ArgumentConversionFailed, TooFewArguments
from ..models import PartialContext
from .converters import Converter

_BACKTICK_RUN = re.compile(r"`+")


def pop_token(text: str) -> Tuple[str, str]:
    """Split one token off the front of ``text``.

    Returns ``(remaining, token)`` with leading whitespace removed from
    ``remaining``. Raises ``TooFewArguments`` when nothing is left.
    """
    stripped = text.lstrip()
    if not stripped:
        raise TooFewArguments()

    if stripped.startswith("`"):
        end = _code_span_end(stripped)
        if end is not None:
            return stripped[end:].lstrip(), stripped[:end]

    token: list[str] = []
    inside_quotes = False
    escaping = False
    end = len(stripped)
    for index, char in enumerate(stripped):
        if escaping:
            token.append(char)
            escaping = False
        elif char.isspace() and not inside_quotes:
            end = index
            break
        elif char == '"':
            inside_quotes = not inside_quotes
        elif char == "\\":
            escaping = True
        else:
            token.append(char)
    return stripped[end:].lstrip(), "".join(token)


def _code_span_end(text: str) -> Optional[int]:
    opening = len(text) - len(text.lstrip("`"))
    for run in _BACKTICK_RUN.finditer(text, opening):
        if len(run.group()) == opening:
            return run.end()
    return None


class ConversionCache:
    """Remembers conversion outcomes for the duration of one parse.

    Backtracking retries splits, not conversions: a literal is handed to a
    given converter at most once and later attempts reuse the outcome.
    """

    def __init__(self) -> None:
        self._outcomes: Dict[Tuple[int, str], Tuple[bool, Any]] = {}

    async def convert(
        self, converter: Converter, ctx: Optional[PartialContext], literal: str
    ) -> Any:
        key = (id(converter), literal)
        if key not in self._outcomes:
            try:
                value = await converter.convert(ctx, literal)
            except Exception as exc:
                self._outcomes[key] = (False, exc)
            else:
                self._outcomes[key] = (True, value)
        succeeded, outcome = self._outcomes[key]
        if not succeeded:
            raise ArgumentConversionFailed(literal, outcome) from outcome
        return outcome


async def consume(
    converter: Converter,
    text: str,
    ctx: Optional[PartialContext] = None,
    cache: Optional[ConversionCache] = None,
) -> Tuple[str, Any]:
    """Pop one token from ``text`` and convert it.

    Returns ``(remaining, value)``. Raises ``TooFewArguments`` if there is no
    token left or ``ArgumentConversionFailed`` if the converter rejects it.
    """
    remaining, token = pop_token(text)
    if cache is None:
        cache = ConversionCache()
    value = await cache.convert(converter, ctx, token)
    return remaining, value
