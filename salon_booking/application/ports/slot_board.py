from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Callable

from salon_booking.domain.entities.slot_board import Slot, SlotBoardEntry

SlotGenerator = Callable[[date], list[Slot]]


class SlotBoardPort(ABC):
    @abstractmethod
    def find(self, day: date) -> SlotBoardEntry | None:
        raise NotImplementedError

    @abstractmethod
    def get_or_create(self, day: date, generator: SlotGenerator) -> SlotBoardEntry:
        """Return the persisted entry for a day, materialising it from the generator if absent."""
        raise NotImplementedError

    @abstractmethod
    def mark_unavailable(self, day: date, time: str, booking_id: str) -> None:
        """Claim a slot for a booking. Logged no-op when the slot row is missing."""
        raise NotImplementedError

    @abstractmethod
    def mark_available(self, day: date, time: str) -> None:
        """Release a slot and clear its booking reference. Logged no-op when missing."""
        raise NotImplementedError

    @abstractmethod
    def block_manually(self, day: date, time: str) -> bool:
        """Mark a slot unavailable with no booking reference. Returns False when no slot matched."""
        raise NotImplementedError

    @abstractmethod
    def save(self, entry: SlotBoardEntry) -> None:
        raise NotImplementedError
