from __future__ import annotations

from datetime import date
from typing import Callable

from salon_booking.domain.entities.slot_board import Slot


def build_default_slot_generator(
    start_hour: int = 9,
    end_hour: int = 18,
    interval_minutes: int = 60,
) -> Callable[[date], list[Slot]]:
    """Hourly 09:00-18:00 by default; both ends inclusive."""
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")

    def generate(day: date) -> list[Slot]:
        slots: list[Slot] = []
        minute = start_hour * 60
        last = end_hour * 60
        while minute <= last and minute < 24 * 60:
            slots.append(Slot(time=f"{minute // 60:02d}:{minute % 60:02d}", available=True))
            minute += interval_minutes
        return slots

    return generate


default_slot_generator = build_default_slot_generator()
