"""Backtracking argument parser.

The slot list is interpreted one slot at a time. Each handler receives the
text left to parse plus the values bound so far and calls back into
``_continue`` for the remaining slots. Slots with an ambiguous width
(optionals and repetitions) try their alternatives in order and move on to
the next alternative only when everything after them failed, so any number
of ambiguous slots in a row backtrack correctly.

Only one error survives: every failing leaf overwrites ``error``, and the one
left over when all alternatives are exhausted is raised. The attempt starts
out with ``TooManyArguments``, which is what a caller sees when every path
parsed cleanly but left input behind.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple

from ..errors import ArgumentParseError, FlagMismatch, TooFewArguments, TooManyArguments
from ..models import PartialContext
from .slots import Slot, SlotKind
from .tokens import ConversionCache, consume, pop_token

Bound = Tuple[Any, ...]
SlotHandler = Callable[[Slot, int, str, Bound], Awaitable[Optional[Bound]]]


class _ParseAttempt:
    def __init__(self, slots: Sequence[Slot], ctx: Optional[PartialContext]) -> None:
        self._slots = tuple(slots)
        self._ctx = ctx
        self._cache = ConversionCache()
        self.error: ArgumentParseError = TooManyArguments()
        self._handlers: Dict[SlotKind, SlotHandler] = {
            SlotKind.REQUIRED: self._consume_one,
            SlotKind.OPTIONAL_GREEDY: self._optional_greedy,
            SlotKind.OPTIONAL_LAZY: self._optional_lazy,
            SlotKind.REPEATED: self._repeated,
            SlotKind.REST_REQUIRED: self._rest,
            SlotKind.REST_OPTIONAL: self._rest,
            SlotKind.FLAG: self._flag,
        }

    async def run(self, args: str) -> Optional[Bound]:
        return await self._continue(0, args, ())

    async def _continue(self, index: int, args: str, bound: Bound) -> Optional[Bound]:
        if index == len(self._slots):
            # Leftover input fails the path but keeps whatever error came before.
            if args.strip():
                return None
            return bound
        slot = self._slots[index]
        return await self._handlers[slot.kind](slot, index, args, bound)

    async def _consume_one(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        try:
            remaining, value = await consume(slot.converter, args, self._ctx, self._cache)
        except ArgumentParseError as exc:
            self.error = exc
            return None
        return await self._continue(index + 1, remaining, bound + (value,))

    async def _optional_greedy(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        result = await self._consume_one(slot, index, args, bound)
        if result is not None:
            return result
        return await self._continue(index + 1, args, bound + (None,))

    async def _optional_lazy(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        result = await self._continue(index + 1, args, bound + (None,))
        if result is not None:
            return result
        return await self._consume_one(slot, index, args, bound)

    async def _repeated(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        values: list[Any] = []
        remainders = [args]
        running = args
        while True:
            try:
                running, value = await consume(slot.converter, running, self._ctx, self._cache)
            except ArgumentParseError as exc:
                self.error = exc
                break
            values.append(value)
            remainders.append(running)

        for count in range(len(values), -1, -1):
            result = await self._continue(index + 1, remainders[count], bound + (values[:count],))
            if result is not None:
                return result
        return None

    async def _rest(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        text = args.lstrip()
        if not text:
            if slot.kind is SlotKind.REST_OPTIONAL:
                return await self._continue(index + 1, text, bound + (None,))
            self.error = TooFewArguments()
            return None
        try:
            value = await self._cache.convert(slot.converter, self._ctx, text)
        except ArgumentParseError as exc:
            self.error = exc
            return None
        return await self._continue(index + 1, "", bound + (value,))

    async def _flag(self, slot: Slot, index: int, args: str, bound: Bound) -> Optional[Bound]:
        try:
            remaining, token = pop_token(args)
        except TooFewArguments:
            remaining, token = args, None
        if token is not None and token.lower() == slot.literal.lower():
            # A flag the user typed exactly is never reinterpreted.
            return await self._continue(index + 1, remaining, bound + (True,))
        self.error = FlagMismatch(slot.literal)
        return await self._continue(index + 1, args, bound + (False,))


async def parse_arguments(
    slots: Sequence[Slot],
    args: str,
    ctx: Optional[PartialContext] = None,
) -> Bound:
    """Bind ``args`` to ``slots``, returning one value per slot.

    Raises the single ``ArgumentParseError`` left over when no split of the
    input satisfies every slot.
    """
    attempt = _ParseAttempt(slots, ctx)
    result = await attempt.run(args)
    if result is None:
        raise attempt.error
    return result
