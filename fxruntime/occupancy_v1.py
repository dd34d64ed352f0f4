"""Occupancy slot (V1): one-of-N mutual exclusion for scene props.

The slot is a tagged value, either ``EMPTY`` or ``Occupied(prop_id)``. Props
that must never share the screen (aquarium diver and mermaid) ask the slot
before appearing and give it back when they leave.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Occupied:
    prop_id: str


class _Empty:
    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()

SlotValue = Union[Occupied, _Empty]


class OccupancySlotV1:
    def __init__(self, name: str = "slot"):
        self.name = name
        self.value: SlotValue = EMPTY

    @property
    def empty(self) -> bool:
        return self.value is EMPTY

    def holder(self) -> Optional[str]:
        if isinstance(self.value, Occupied):
            return self.value.prop_id
        return None

    def held_by(self, prop_id: str) -> bool:
        return self.holder() == prop_id

    def occupy(self, prop_id: str) -> bool:
        """Claim the slot. True if granted (already held by the same prop counts)."""
        if self.value is EMPTY:
            self.value = Occupied(str(prop_id))
            return True
        return self.held_by(prop_id)

    def vacate(self, prop_id: str) -> bool:
        if self.held_by(prop_id):
            self.value = EMPTY
            return True
        return False

    def clear(self) -> None:
        self.value = EMPTY
