from abc import ABC, abstractmethod

from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind


class NotifierPort(ABC):
    @abstractmethod
    def send(self, phone: str, kind: NotificationKind, details: NotificationDetails) -> bool:
        """
        Deliver a templated message to a customer.
        Returns True on success. Implementations log failures instead of raising.
        """
        raise NotImplementedError
