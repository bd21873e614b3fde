from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


@dataclass(frozen=True)
class Booking:
    name: str
    phone: str
    service: str
    date: date
    time: str | None = None
    time_slot: str | None = None  # wire name "timeSlot", alias of time
    status: BookingStatus = BookingStatus.confirmed
    email: str | None = None
    service_id: str | None = None
    notes: str | None = None
    user_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def effective_time(self) -> str:
        return self.time_slot or self.time or ""

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.cancelled

    def with_synced_times(self) -> Booking:
        """Copy time/time_slot across when only one of them is set."""
        if self.time and not self.time_slot:
            return replace(self, time_slot=self.time)
        if self.time_slot and not self.time:
            return replace(self, time=self.time_slot)
        return self


def slot_key(day: date, time: str) -> str:
    """Uniqueness key for an active booking, e.g. ``2026-01-28T14:00``."""
    return f"{day.isoformat()}T{time}"
