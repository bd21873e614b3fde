from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Slot:
    time: str
    available: bool = True
    booked_by: str | None = None  # booking id; None for free or manually blocked slots


@dataclass(frozen=True)
class SlotBoardEntry:
    date: date
    slots: list[Slot] = field(default_factory=list)
    id: str | None = None

    def find_slot(self, time: str) -> Slot | None:
        for slot in self.slots:
            if slot.time == time:
                return slot
        return None
