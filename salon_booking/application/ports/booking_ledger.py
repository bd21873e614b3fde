from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from salon_booking.domain.entities.booking import Booking, BookingStatus


class BookingLedgerPort(ABC):
    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def find_conflict(self, day: date, effective_time: str, exclude_cancelled: bool = True) -> Booking | None:
        """Return a booking occupying day+time, ignoring cancelled ones unless asked not to."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, booking: Booking) -> str:
        """
        Persist a new booking and return its id.
        Raises SlotConflictError when the storage layer rejects a duplicate active slot.
        """
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking_id: str, new_status: BookingStatus, notes: str | None = None) -> Booking:
        """Overwrite status (and notes when given). Raises BookingNotFoundError."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self, booking_id: str, today: date) -> Booking:
        """
        Mark a booking cancelled.
        Raises BookingNotFoundError, AlreadyCancelledError or PastDateError.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_booked_times(self, day: date) -> list[str]:
        """De-duplicated effective times of non-cancelled bookings on a day."""
        raise NotImplementedError

    @abstractmethod
    def list_active_on(self, day: date) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def list_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> list[Booking]:
        """Newest day first, then by time. ``limit=None`` returns every match."""
        raise NotImplementedError

    @abstractmethod
    def count_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
    ) -> int:
        raise NotImplementedError
