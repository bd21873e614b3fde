from __future__ import annotations

import logging

from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.application.utils.dates import format_for_message
from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind
from salon_booking.infrastructure.notifications.whatsapp_client import TwilioWhatsAppClient

TEMPLATES: dict[NotificationKind, str] = {
    NotificationKind.confirmation: "Hi {name}! Your booking for {service} on {date} at {time} is confirmed! - {business}",
    NotificationKind.cancellation: "Hi {name}! Your booking for {service} on {date} at {time} has been cancelled. - {business}",
    NotificationKind.completion: (
        "Hi {name}! Thank you for visiting us! Your {service} service on {date} at {time} is completed. "
        "We hope to see you again! - {business}"
    ),
    NotificationKind.reminder: "Reminder: Your booking for {service} at {time} today! - {business}",
}


def render_message(kind: NotificationKind, details: NotificationDetails, business_name: str) -> str:
    return TEMPLATES[kind].format(
        name=details.name,
        service=details.service,
        date=format_for_message(details.date),
        time=details.time,
        business=business_name,
    )


class WhatsAppNotifier(NotifierPort):
    def __init__(self, client: TwilioWhatsAppClient, business_name: str, country_code: str = "+91") -> None:
        self._client = client
        self._business_name = business_name
        self._country_code = country_code
        self._logger = logging.getLogger(__name__)

    def send(self, phone: str, kind: NotificationKind, details: NotificationDetails) -> bool:
        body = render_message(kind, details, self._business_name)
        try:
            self._client.send_text(to_number=f"{self._country_code}{phone}", body=body)
        except Exception as e:
            self._logger.error("Notification failed", extra={"kind": kind.value, "error": str(e)})
            return False
        self._logger.info("Notification sent", extra={"kind": kind.value})
        return True
