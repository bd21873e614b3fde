"""Shared fixtures: in-memory stores, a recording notifier and a fixed business clock."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.application.use_cases.booking_coordinator import BookingCoordinator
from salon_booking.application.use_cases.reviews import ReviewsUseCase
from salon_booking.application.use_cases.services import ServicesUseCase
from salon_booking.application.utils.side_effects import BestEffortRunner
from salon_booking.domain.entities.booking import Booking
from salon_booking.domain.entities.notification import NotificationDetails, NotificationKind
from salon_booking.infrastructure.store.memory_store import (
    MemoryBookingLedger,
    MemoryReviewStore,
    MemoryServiceCatalog,
    MemorySlotBoard,
)

TZ = ZoneInfo("Asia/Kolkata")
FIXED_NOW = datetime(2026, 1, 20, 10, 30, tzinfo=TZ)
BOOKING_DAY = date(2026, 1, 28)


class RecordingNotifier(NotifierPort):
    def __init__(self) -> None:
        self.sent: list[tuple[str, NotificationKind, NotificationDetails]] = []

    def send(self, phone: str, kind: NotificationKind, details: NotificationDetails) -> bool:
        self.sent.append((phone, kind, details))
        return True

    def kinds(self) -> list[NotificationKind]:
        return [kind for _, kind, _ in self.sent]


def make_booking(day: date = BOOKING_DAY, time: str | None = "14:00", **overrides) -> Booking:
    fields = {
        "name": "Asha Rao",
        "phone": "9876543210",
        "service": "Haircut",
        "date": day,
        "time": time,
    }
    fields.update(overrides)
    return Booking(**fields)


@pytest.fixture
def ledger() -> MemoryBookingLedger:
    return MemoryBookingLedger()


@pytest.fixture
def slot_board() -> MemorySlotBoard:
    return MemorySlotBoard()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def runner():
    runner = BestEffortRunner(timeout_seconds=2.0)
    yield runner
    runner.shutdown()


@pytest.fixture
def coordinator(ledger, slot_board, notifier, runner) -> BookingCoordinator:
    return BookingCoordinator(
        ledger=ledger,
        slot_board=slot_board,
        notifier=notifier,
        timezone=TZ,
        runner=runner,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def service_catalog() -> MemoryServiceCatalog:
    return MemoryServiceCatalog()


@pytest.fixture
def review_store() -> MemoryReviewStore:
    return MemoryReviewStore()


@pytest.fixture
def client(coordinator, ledger, service_catalog, review_store):
    from salon_booking.main import app
    from salon_booking.wiring import dependencies

    app.dependency_overrides[dependencies.get_booking_coordinator] = lambda: coordinator
    app.dependency_overrides[dependencies.get_booking_ledger] = lambda: ledger
    app.dependency_overrides[dependencies.get_service_catalog] = lambda: service_catalog
    app.dependency_overrides[dependencies.get_services_use_case] = lambda: ServicesUseCase(catalog=service_catalog)
    app.dependency_overrides[dependencies.get_reviews_use_case] = lambda: ReviewsUseCase(store=review_store)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
