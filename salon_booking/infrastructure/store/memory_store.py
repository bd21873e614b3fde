from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from bson import ObjectId

from salon_booking.application.exceptions import (
    AlreadyCancelledError,
    BookingNotFoundError,
    PastDateError,
    SlotConflictError,
)
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.review_store import ReviewStorePort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.ports.slot_board import SlotBoardPort, SlotGenerator
from salon_booking.domain.entities.booking import Booking, BookingStatus, slot_key
from salon_booking.domain.entities.review import Review
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.domain.entities.slot_board import Slot, SlotBoardEntry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(ObjectId())


class MemoryBookingLedger(BookingLedgerPort):
    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def get(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def find_conflict(self, day: date, effective_time: str, exclude_cancelled: bool = True) -> Booking | None:
        for booking in list(self._bookings.values()):
            if booking.date != day or booking.effective_time != effective_time:
                continue
            if exclude_cancelled and not booking.is_active:
                continue
            return booking
        return None

    def insert(self, booking: Booking) -> str:
        booking = booking.with_synced_times()
        with self._lock:
            if booking.is_active and self._holder_of(booking.date, booking.effective_time) is not None:
                raise SlotConflictError()
            booking_id = _new_id()
            now = _utc_now()
            self._bookings[booking_id] = replace(booking, id=booking_id, created_at=now, updated_at=now)
        return booking_id

    def update_status(self, booking_id: str, new_status: BookingStatus, notes: str | None = None) -> Booking:
        with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                raise BookingNotFoundError()
            if new_status != BookingStatus.cancelled and not current.is_active:
                holder = self._holder_of(current.date, current.effective_time)
                if holder is not None and holder != booking_id:
                    raise SlotConflictError()
            updated = replace(
                current,
                status=new_status,
                notes=notes if notes is not None else current.notes,
                updated_at=_utc_now(),
            ).with_synced_times()
            self._bookings[booking_id] = updated
        return updated

    def cancel(self, booking_id: str, today: date) -> Booking:
        with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                raise BookingNotFoundError()
            if current.status == BookingStatus.cancelled:
                raise AlreadyCancelledError()
            if current.date < today:
                raise PastDateError("Cannot cancel past bookings")
            cancelled = replace(current, status=BookingStatus.cancelled, updated_at=_utc_now())
            self._bookings[booking_id] = cancelled
        return cancelled

    def delete(self, booking_id: str) -> None:
        with self._lock:
            if self._bookings.pop(booking_id, None) is None:
                raise BookingNotFoundError()

    def list_booked_times(self, day: date) -> list[str]:
        return sorted({b.effective_time for b in self.list_active_on(day) if b.effective_time})

    def list_active_on(self, day: date) -> list[Booking]:
        return [b for b in list(self._bookings.values()) if b.date == day and b.is_active]

    def list_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> list[Booking]:
        matches = self._filter(day, status, search, phone)
        # newest day first, earliest time first within a day
        matches.sort(key=lambda b: b.effective_time)
        matches.sort(key=lambda b: b.date, reverse=True)
        if limit is None:
            return matches
        start = (max(page, 1) - 1) * limit
        return matches[start : start + limit]

    def count_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
    ) -> int:
        return len(self._filter(day, status, search, phone))

    def _filter(
        self,
        day: date | None,
        status: BookingStatus | None,
        search: str | None,
        phone: str | None,
    ) -> list[Booking]:
        needle = search.lower() if search else None
        result: list[Booking] = []
        for booking in list(self._bookings.values()):
            if day is not None and booking.date != day:
                continue
            if status is not None and booking.status != status:
                continue
            if phone is not None and booking.phone != phone:
                continue
            if needle and not any(needle in (field or "").lower() for field in (booking.name, booking.phone, booking.email)):
                continue
            result.append(booking)
        return result

    def _holder_of(self, day: date, time: str) -> str | None:
        key = slot_key(day, time)
        for booking in self._bookings.values():
            if booking.is_active and slot_key(booking.date, booking.effective_time) == key:
                return booking.id
        return None


class MemorySlotBoard(SlotBoardPort):
    def __init__(self) -> None:
        self._boards: dict[date, SlotBoardEntry] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def find(self, day: date) -> SlotBoardEntry | None:
        return self._boards.get(day)

    def get_or_create(self, day: date, generator: SlotGenerator) -> SlotBoardEntry:
        with self._lock:
            board = self._boards.get(day)
            if board is None:
                board = SlotBoardEntry(date=day, slots=list(generator(day)), id=_new_id())
                self._boards[day] = board
                self._logger.info("Slot board created", extra={"date": day.isoformat(), "slots": len(board.slots)})
            return board

    def mark_unavailable(self, day: date, time: str, booking_id: str) -> None:
        self._set_slot(day, time, available=False, booked_by=booking_id)

    def mark_available(self, day: date, time: str) -> None:
        self._set_slot(day, time, available=True, booked_by=None)

    def block_manually(self, day: date, time: str) -> bool:
        return self._set_slot(day, time, available=False, booked_by=None)

    def save(self, entry: SlotBoardEntry) -> None:
        with self._lock:
            self._boards[entry.date] = entry

    def _set_slot(self, day: date, time: str, available: bool, booked_by: str | None) -> bool:
        with self._lock:
            board = self._boards.get(day)
            if board is None or board.find_slot(time) is None:
                self._logger.info("No slot row to update", extra={"date": day.isoformat(), "time": time})
                return False
            slots = [
                Slot(time=s.time, available=available, booked_by=booked_by) if s.time == time else s
                for s in board.slots
            ]
            self._boards[day] = replace(board, slots=slots)
            return True


class MemoryServiceCatalog(ServiceCatalogPort):
    def __init__(self) -> None:
        self._services: dict[str, Service] = {}

    def create(self, service: Service) -> Service:
        now = _utc_now()
        created = replace(service, id=_new_id(), created_at=now, updated_at=now)
        self._services[created.id] = created
        return created

    def list(self, category: ServiceCategory | None = None) -> list[Service]:
        services = list(self._services.values())
        if category is not None:
            services = [s for s in services if s.category == category]
        return services

    def get(self, service_id: str) -> Service | None:
        return self._services.get(service_id)

    def update(self, service_id: str, changes: dict[str, Any]) -> Service | None:
        current = self._services.get(service_id)
        if current is None:
            return None
        updated = replace(current, **changes, updated_at=_utc_now())
        self._services[service_id] = updated
        return updated

    def delete(self, service_id: str) -> bool:
        return self._services.pop(service_id, None) is not None


class MemoryReviewStore(ReviewStorePort):
    def __init__(self) -> None:
        self._reviews: dict[str, Review] = {}

    def create(self, review: Review) -> Review:
        created = replace(review, id=_new_id(), created_at=review.created_at or _utc_now())
        self._reviews[created.id] = created
        return created

    def list(self, approved_only: bool = False) -> list[Review]:
        reviews = [r for r in self._reviews.values() if r.approved or not approved_only]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def approve(self, review_id: str) -> Review | None:
        current = self._reviews.get(review_id)
        if current is None:
            return None
        approved = replace(current, approved=True)
        self._reviews[review_id] = approved
        return approved

    def delete(self, review_id: str) -> bool:
        return self._reviews.pop(review_id, None) is not None
