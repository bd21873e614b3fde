from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.review import Review


class ReviewStorePort(ABC):
    @abstractmethod
    def create(self, review: Review) -> Review:
        raise NotImplementedError

    @abstractmethod
    def list(self, approved_only: bool = False) -> list[Review]:
        """Newest first."""
        raise NotImplementedError

    @abstractmethod
    def approve(self, review_id: str) -> Review | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, review_id: str) -> bool:
        raise NotImplementedError
