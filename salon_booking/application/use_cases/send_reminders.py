from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.application.utils.dates import today_in
from salon_booking.domain.entities.booking import BookingStatus
from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind


class SendRemindersUseCase:
    def __init__(
        self,
        ledger: BookingLedgerPort,
        notifier: NotifierPort,
        timezone: ZoneInfo,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ledger = ledger
        self._notifier = notifier
        self._timezone = timezone
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def execute(self, day: date | None = None) -> int:
        """Send a reminder for each confirmed booking on ``day`` (default: today). Returns messages sent."""
        target = day or today_in(self._timezone, self._clock())
        bookings = self._ledger.list_bookings(day=target, status=BookingStatus.confirmed)
        sent = 0
        for booking in bookings:
            details = NotificationDetails(
                name=booking.name,
                service=booking.service,
                date=booking.date,
                time=booking.effective_time,
            )
            if self._notifier.send(booking.phone, NotificationKind.reminder, details):
                sent += 1
        self._logger.info("Reminders sent", extra={"date": target.isoformat(), "sent": sent, "total": len(bookings)})
        return sent
