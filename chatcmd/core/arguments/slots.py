"""Parameter slot descriptors for prefix commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from ..errors import SlotSpecError
from .converters import Converter, StringConverter, resolve_converter


class SlotKind(str, Enum):
    REQUIRED = "required"
    OPTIONAL_GREEDY = "optional_greedy"
    OPTIONAL_LAZY = "optional_lazy"
    REST_REQUIRED = "rest_required"
    REST_OPTIONAL = "rest_optional"
    REPEATED = "repeated"
    FLAG = "flag"


REST_KINDS = frozenset({SlotKind.REST_REQUIRED, SlotKind.REST_OPTIONAL})


@dataclass(frozen=True)
class Slot:
    kind: SlotKind
    converter: Optional[Converter] = None
    literal: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_rest(self) -> bool:
        return self.kind in REST_KINDS

    def usage(self) -> str:
        """Render the slot the way it appears in a usage line."""
        if self.kind is SlotKind.FLAG:
            return f"[{self.literal}]"
        name = self.name or "value"
        if self.kind is SlotKind.REQUIRED:
            return f"<{name}>"
        if self.kind is SlotKind.REST_REQUIRED:
            return f"<{name}...>"
        if self.kind in (SlotKind.REPEATED, SlotKind.REST_OPTIONAL):
            return f"[{name}...]"
        return f"[{name}]"


def required(spec: Any = str, *, name: Optional[str] = None) -> Slot:
    return Slot(SlotKind.REQUIRED, resolve_converter(spec), name=name)


def optional(spec: Any = str, *, lazy: bool = False, name: Optional[str] = None) -> Slot:
    """An optional slot; greedy ones try to consume before skipping, lazy ones skip first."""
    kind = SlotKind.OPTIONAL_LAZY if lazy else SlotKind.OPTIONAL_GREEDY
    return Slot(kind, resolve_converter(spec), name=name)


def rest(spec: Any = str, *, optional: bool = False, name: Optional[str] = None) -> Slot:
    """Capture everything left in the message, whitespace included."""
    kind = SlotKind.REST_OPTIONAL if optional else SlotKind.REST_REQUIRED
    return Slot(kind, resolve_converter(spec), name=name)


def repeated(spec: Any = str, *, name: Optional[str] = None) -> Slot:
    return Slot(SlotKind.REPEATED, resolve_converter(spec), name=name)


def flag(literal: str) -> Slot:
    return Slot(SlotKind.FLAG, StringConverter(), literal=literal, name=literal)


def validate_slots(slots: Iterable[Slot]) -> Tuple[Slot, ...]:
    """Check a slot sequence once, when the command is built."""
    checked = tuple(slots)
    for index, slot in enumerate(checked):
        if not isinstance(slot, Slot):
            raise SlotSpecError(f"Parameter {index} is not a Slot: {slot!r}")
        if slot.is_rest and index != len(checked) - 1:
            raise SlotSpecError("A rest parameter must be the last parameter")
        if slot.kind is SlotKind.FLAG:
            if not slot.literal or any(char.isspace() for char in slot.literal):
                raise SlotSpecError(f"Invalid flag literal {slot.literal!r}")
        elif slot.converter is None:
            raise SlotSpecError(f"Parameter {index} has no converter")
    return checked
