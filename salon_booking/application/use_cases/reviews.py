from __future__ import annotations

import logging
from dataclasses import replace

from salon_booking.application.exceptions import ResourceNotFoundError
from salon_booking.application.ports.review_store import ReviewStorePort
from salon_booking.domain.entities.review import Review


class ReviewsUseCase:
    def __init__(self, store: ReviewStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def submit(self, review: Review) -> Review:
        # New reviews always wait for moderation.
        created = self._store.create(replace(review, approved=False, verified=False))
        self._logger.info("Review submitted", extra={"service": created.service, "rating": created.rating})
        return created

    def list_public(self) -> list[Review]:
        return self._store.list(approved_only=True)

    def list_all(self) -> list[Review]:
        return self._store.list(approved_only=False)

    def approve(self, review_id: str) -> Review:
        review = self._store.approve(review_id)
        if review is None:
            raise ResourceNotFoundError("Review not found")
        return review

    def delete(self, review_id: str) -> None:
        if not self._store.delete(review_id):
            raise ResourceNotFoundError("Review not found")
