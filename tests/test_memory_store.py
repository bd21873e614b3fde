from __future__ import annotations

from datetime import date

import pytest

from conftest import BOOKING_DAY, make_booking
from salon_booking.application.exceptions import BookingNotFoundError, SlotConflictError
from salon_booking.application.utils.slots import build_default_slot_generator, default_slot_generator
from salon_booking.domain.entities.booking import BookingStatus


def test_list_booked_times_is_deduplicated_and_skips_cancelled(ledger):
    ledger.insert(make_booking(time="14:00"))
    ledger.insert(make_booking(time="10:00"))
    ledger.insert(make_booking(time="10:00", status=BookingStatus.cancelled))
    ledger.insert(make_booking(time="16:00", status=BookingStatus.cancelled))

    assert ledger.list_booked_times(BOOKING_DAY) == ["10:00", "14:00"]


def test_insert_enforces_one_active_booking_per_slot(ledger):
    ledger.insert(make_booking())

    with pytest.raises(SlotConflictError):
        ledger.insert(make_booking(name="Meera Shah"))


def test_cancelled_records_do_not_hold_the_slot(ledger):
    first = ledger.insert(make_booking(status=BookingStatus.cancelled))
    second = ledger.insert(make_booking())

    assert first != second
    assert ledger.find_conflict(BOOKING_DAY, "14:00").id == second
    assert ledger.find_conflict(BOOKING_DAY, "14:00", exclude_cancelled=False) is not None


def test_insert_stamps_id_and_timestamps(ledger):
    booking_id = ledger.insert(make_booking(time=None, time_slot="12:00"))
    stored = ledger.get(booking_id)

    assert len(booking_id) == 24
    assert stored.id == booking_id
    assert stored.created_at is not None
    assert stored.time == "12:00"


def test_list_bookings_sorts_and_paginates(ledger):
    ledger.insert(make_booking(day=date(2026, 1, 29), time="11:00"))
    ledger.insert(make_booking(day=BOOKING_DAY, time="15:00"))
    ledger.insert(make_booking(day=BOOKING_DAY, time="09:00"))

    ordered = ledger.list_bookings()
    assert [(b.date.day, b.effective_time) for b in ordered] == [(29, "11:00"), (28, "09:00"), (28, "15:00")]

    page_two = ledger.list_bookings(page=2, limit=2)
    assert [b.effective_time for b in page_two] == ["15:00"]
    assert ledger.count_bookings() == 3


def test_search_matches_name_phone_or_email(ledger):
    ledger.insert(make_booking(time="10:00", name="Priya Nair", email="priya@example.com"))
    ledger.insert(make_booking(time="11:00", phone="9000000001"))

    assert ledger.count_bookings(search="PRIYA") == 1
    assert ledger.count_bookings(search="example.com") == 1
    assert ledger.count_bookings(search="0000001") == 1
    assert ledger.count_bookings(search="nobody") == 0


def test_delete_unknown_booking(ledger):
    with pytest.raises(BookingNotFoundError):
        ledger.delete("65b1f0c2a1b2c3d4e5f60718")


def test_get_or_create_persists_generated_board(slot_board):
    created = slot_board.get_or_create(BOOKING_DAY, default_slot_generator)

    assert slot_board.find(BOOKING_DAY) is created
    assert slot_board.get_or_create(BOOKING_DAY, build_default_slot_generator(10, 11)) is created


def test_marking_without_a_board_is_a_no_op(slot_board):
    slot_board.mark_unavailable(BOOKING_DAY, "14:00", "65b1f0c2a1b2c3d4e5f60718")
    slot_board.mark_available(BOOKING_DAY, "14:00")

    assert slot_board.find(BOOKING_DAY) is None
    assert slot_board.block_manually(BOOKING_DAY, "14:00") is False


def test_marking_unknown_time_leaves_board_untouched(slot_board):
    before = slot_board.get_or_create(BOOKING_DAY, default_slot_generator)

    slot_board.mark_unavailable(BOOKING_DAY, "14:30", "65b1f0c2a1b2c3d4e5f60718")

    assert slot_board.find(BOOKING_DAY) == before


def test_slot_generator_bounds():
    times = [s.time for s in build_default_slot_generator(9, 11, 30)(BOOKING_DAY)]
    assert times == ["09:00", "09:30", "10:00", "10:30", "11:00"]

    with pytest.raises(ValueError):
        build_default_slot_generator(interval_minutes=0)
