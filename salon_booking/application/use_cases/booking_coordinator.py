from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from salon_booking.application.exceptions import (
    BookingNotFoundError,
    InvalidInputError,
    PastDateError,
    ResourceNotFoundError,
    SlotConflictError,
)
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.application.ports.slot_board import SlotBoardPort, SlotGenerator
from salon_booking.application.utils.dates import today_in
from salon_booking.application.utils.side_effects import BestEffortRunner
from salon_booking.application.utils.slots import default_slot_generator
from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind
from salon_booking.domain.entities.slot_board import Slot, SlotBoardEntry

_TRANSITION_NOTIFICATIONS = {
    BookingStatus.cancelled: NotificationKind.cancellation,
    BookingStatus.confirmed: NotificationKind.confirmation,
    BookingStatus.completed: NotificationKind.completion,
}


class BookingCoordinator:
    """
    Sole writer of booking state. The ledger is authoritative; slot board updates
    and notifications run afterwards as best-effort steps.
    """

    def __init__(
        self,
        ledger: BookingLedgerPort,
        slot_board: SlotBoardPort,
        notifier: NotifierPort,
        timezone: ZoneInfo,
        runner: BestEffortRunner | None = None,
        slot_generator: SlotGenerator = default_slot_generator,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ledger = ledger
        self._slot_board = slot_board
        self._notifier = notifier
        self._timezone = timezone
        self._runner = runner or BestEffortRunner()
        self._slot_generator = slot_generator
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def today(self) -> date:
        return today_in(self._timezone, self._clock())

    def create(self, draft: Booking) -> Booking:
        booking = draft.with_synced_times()
        selected_time = booking.effective_time
        if not selected_time:
            raise InvalidInputError("Time slot is required")

        if booking.date < self.today():
            raise PastDateError("Cannot book appointments in the past")

        self._check_slot_board(booking.date, selected_time)

        if self._ledger.find_conflict(booking.date, selected_time) is not None:
            raise SlotConflictError()

        booking_id = self._ledger.insert(booking)
        # The insert is committed; a failed read-back must not fail the request.
        try:
            stored = self._ledger.get(booking_id)
        except Exception as e:
            self._logger.warning("Read-back after insert failed", extra={"booking_id": booking_id, "error": str(e)})
            stored = None
        created = stored or replace(booking, id=booking_id)
        self._logger.info(
            "Booking created",
            extra={"booking_id": booking_id, "date": created.date.isoformat(), "time": selected_time, "status": created.status.value},
        )

        if created.is_active:
            self._runner.run(
                "slot_board.mark_unavailable",
                self._slot_board.mark_unavailable,
                created.date,
                selected_time,
                booking_id,
            )
        self._notify(created, NotificationKind.confirmation)
        return created

    def update_status(self, booking_id: str, new_status: BookingStatus, notes: str | None = None) -> Booking:
        current = self._ledger.get(booking_id)
        if current is None:
            raise BookingNotFoundError()

        old_status = current.status
        updated = self._ledger.update_status(booking_id, new_status, notes)
        self._logger.info(
            "Booking status updated",
            extra={"booking_id": booking_id, "status": f"{old_status.value}->{new_status.value}"},
        )

        if new_status == old_status:
            return updated

        if new_status == BookingStatus.cancelled:
            self._release_slot(updated)
        elif old_status == BookingStatus.cancelled:
            self._runner.run(
                "slot_board.mark_unavailable",
                self._slot_board.mark_unavailable,
                updated.date,
                updated.effective_time,
                booking_id,
            )

        kind = _TRANSITION_NOTIFICATIONS.get(new_status)
        if kind is not None:
            self._notify(updated, kind)
        return updated

    def cancel(self, booking_id: str) -> Booking:
        cancelled = self._ledger.cancel(booking_id, self.today())
        self._logger.info("Booking cancelled", extra={"booking_id": booking_id})
        self._release_slot(cancelled)
        self._notify(cancelled, NotificationKind.cancellation)
        return cancelled

    def delete(self, booking_id: str) -> None:
        booking = self._ledger.get(booking_id)
        if booking is None:
            raise BookingNotFoundError()

        # Release first: the record carries the date/time needed to find the slot.
        self._release_slot(booking)
        self._ledger.delete(booking_id)
        self._logger.info("Booking deleted", extra={"booking_id": booking_id})

    def get_slot_board(self, day: date) -> SlotBoardEntry:
        return self._slot_board.get_or_create(day, self._slot_generator)

    def block_slot(self, day: date, time: str) -> None:
        """Admin block: slot becomes unavailable without a booking reference."""
        self._slot_board.get_or_create(day, self._slot_generator)
        if not self._slot_board.block_manually(day, time):
            raise ResourceNotFoundError("Slot not found")
        self._logger.info("Slot blocked", extra={"date": day.isoformat(), "time": time})

    def reconcile_slot_board(self, day: date) -> SlotBoardEntry:
        """Rebuild a day's slot board from the ledger. Manual blocks are kept."""
        board = self._slot_board.get_or_create(day, self._slot_generator)
        holders = {b.effective_time: b.id for b in self._ledger.list_active_on(day)}

        slots: list[Slot] = []
        changed = 0
        for slot in board.slots:
            holder = holders.get(slot.time)
            if holder is not None:
                repaired = Slot(time=slot.time, available=False, booked_by=holder)
            elif slot.booked_by is not None:
                repaired = Slot(time=slot.time, available=True, booked_by=None)
            else:
                repaired = slot
            if repaired != slot:
                changed += 1
            slots.append(repaired)

        repaired_board = replace(board, slots=slots)
        self._slot_board.save(repaired_board)
        self._logger.info("Slot board reconciled", extra={"date": day.isoformat(), "changed": changed})
        return repaired_board

    def _check_slot_board(self, day: date, time: str) -> None:
        try:
            board = self._slot_board.find(day)
        except Exception as e:
            self._logger.warning("Slot board check failed", extra={"date": day.isoformat(), "error": str(e)})
            return
        if board is None:
            return
        slot = board.find_slot(time)
        if slot is not None and not slot.available:
            raise SlotConflictError()

    def _release_slot(self, booking: Booking) -> None:
        self._runner.run(
            "slot_board.mark_available",
            self._slot_board.mark_available,
            booking.date,
            booking.effective_time,
        )

    def _notify(self, booking: Booking, kind: NotificationKind) -> None:
        details = NotificationDetails(
            name=booking.name,
            service=booking.service,
            date=booking.date,
            time=booking.effective_time,
        )
        self._runner.run(f"notify.{kind.value}", self._notifier.send, booking.phone, kind, details)
