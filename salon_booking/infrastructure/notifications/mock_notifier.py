from __future__ import annotations

import logging

from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind
from salon_booking.infrastructure.notifications.whatsapp_notifier import render_message


class MockNotifier(NotifierPort):
    def __init__(self, business_name: str = "Luxe Beauty Studio") -> None:
        self._business_name = business_name
        self._logger = logging.getLogger(__name__)

    def send(self, phone: str, kind: NotificationKind, details: NotificationDetails) -> bool:
        self._logger.info(
            "WOULD_SEND_NOTIFICATION",
            extra={"kind": kind.value, "reply_text": render_message(kind, details, self._business_name)},
        )
        return True
