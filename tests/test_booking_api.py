from __future__ import annotations

from datetime import date

from conftest import make_booking
from salon_booking.domain.entities.booking import BookingStatus
from salon_booking.domain.entities.notification import NotificationKind
from salon_booking.domain.entities.service import Service, ServiceCategory

BOOKING_PAYLOAD = {
    "name": "Asha Rao",
    "phone": "9876543210",
    "email": "Asha@Example.com",
    "service": "Haircut",
    "date": "2026-01-28",
    "time": "14:00",
}


def _create(client, **overrides):
    return client.post("/api/bookings", json={**BOOKING_PAYLOAD, **overrides})


def test_create_booking_returns_created_record(client, notifier):
    res = _create(client)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Booking created successfully"
    booking = body["booking"]
    assert booking["date"] == "2026-01-28"
    assert booking["time"] == "14:00"
    assert booking["timeSlot"] == "14:00"
    assert booking["status"] == "confirmed"
    assert booking["email"] == "asha@example.com"
    assert len(booking["id"]) == 24
    assert notifier.kinds() == [NotificationKind.confirmation]


def test_booking_scenario_conflict_cancel_rebook(client):
    slots = client.get("/api/timeslots", params={"date": "2026-01-28"}).json()["slots"]
    assert len(slots) == 10

    first = _create(client).json()["booking"]

    board = {s["time"]: s for s in client.get("/api/timeslots", params={"date": "2026-01-28"}).json()["slots"]}
    assert board["14:00"]["available"] is False
    assert board["14:00"]["bookedBy"] == first["id"]

    conflict = _create(client, name="Meera Shah")
    assert conflict.status_code == 409
    assert conflict.json() == {
        "success": False,
        "message": "This time slot is already booked. Please select another time.",
    }

    cancel = client.patch(f"/api/bookings/{first['id']}/cancel")
    assert cancel.status_code == 200
    assert cancel.json()["message"] == "Booking cancelled successfully"

    board = {s["time"]: s for s in client.get("/api/timeslots", params={"date": "2026-01-28"}).json()["slots"]}
    assert board["14:00"]["available"] is True

    rebook = _create(client, name="Meera Shah")
    assert rebook.status_code == 201


def test_create_accepts_iso_datetime_and_time_slot_alias(client):
    res = _create(client, date="2026-01-28T00:00:00.000Z", time=None, timeSlot="16:00")

    assert res.status_code == 201
    booking = res.json()["booking"]
    assert booking["date"] == "2026-01-28"
    assert booking["time"] == "16:00"
    assert booking["timeSlot"] == "16:00"


def test_create_requires_a_time(client):
    payload = {k: v for k, v in BOOKING_PAYLOAD.items() if k != "time"}

    res = client.post("/api/bookings", json=payload)

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "Either time or timeSlot is required" in res.json()["message"]


def test_create_validation_errors_are_400(client):
    assert _create(client, phone="12345").status_code == 400
    assert _create(client, name="A").status_code == 400
    assert _create(client, time="2pm").status_code == 400
    assert _create(client, email="not-an-email").status_code == 400
    assert _create(client, date="28/01/2026").status_code == 400
    assert _create(client, notes="x" * 501).status_code == 400

    res = client.post("/api/bookings", json={})
    assert res.status_code == 400
    assert "name: Field required" in res.json()["message"]


def test_create_in_the_past_is_rejected(client):
    res = _create(client, date="2026-01-19")

    assert res.status_code == 400
    assert res.json()["message"] == "Cannot book appointments in the past"


def test_booked_slots_for_day(client, ledger):
    ledger.insert(make_booking(time="14:00"))
    ledger.insert(make_booking(time="10:00"))
    ledger.insert(make_booking(time="11:00", status=BookingStatus.cancelled))

    res = client.get("/api/bookings/slots", params={"date": "2026-01-28"})

    assert res.status_code == 200
    assert res.json() == {"success": True, "date": "2026-01-28", "bookedSlots": ["10:00", "14:00"]}


def test_booked_slots_requires_valid_date(client):
    missing = client.get("/api/bookings/slots")
    assert missing.status_code == 400
    assert missing.json()["message"] == "Date parameter is required (format: YYYY-MM-DD)"

    bad = client.get("/api/bookings/slots", params={"date": "Jan 28"})
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid date format. Use YYYY-MM-DD"


def test_list_all_paginates_and_filters(client, ledger):
    for hour in range(9, 14):
        ledger.insert(make_booking(time=f"{hour:02d}:00", name=f"Client {hour}"))
    ledger.insert(make_booking(time="15:00", status=BookingStatus.pending, name="Priya Nair"))

    page = client.get("/api/bookings/all", params={"page": 2, "limit": 4}).json()
    assert page["total"] == 6
    assert page["totalPages"] == 2
    assert page["currentPage"] == 2
    assert len(page["bookings"]) == 2

    pending = client.get("/api/bookings/all", params={"status": "pending"}).json()
    assert [b["name"] for b in pending["bookings"]] == ["Priya Nair"]

    searched = client.get("/api/bookings/all", params={"search": "priya"}).json()
    assert searched["total"] == 1


def test_list_all_clamps_limit(client, ledger):
    ledger.insert(make_booking())

    body = client.get("/api/bookings/all", params={"limit": 0, "page": -3}).json()

    assert body["currentPage"] == 1
    assert body["totalPages"] == 1


def test_list_all_includes_service_details(client, ledger, service_catalog):
    service = service_catalog.create(Service(name="Keratin", price=2500, duration=90, category=ServiceCategory.hair))
    ledger.insert(make_booking(service="Keratin", service_id=service.id))

    booking = client.get("/api/bookings/all").json()["bookings"][0]

    assert booking["serviceId"] == service.id
    assert booking["serviceDetails"] == {"id": service.id, "name": "Keratin", "duration": 90}


def test_my_bookings_filters_by_phone(client, ledger):
    ledger.insert(make_booking(time="10:00"))
    ledger.insert(make_booking(time="11:00", phone="9123456780"))

    body = client.get("/api/bookings/my-bookings", params={"phone": "9123456780"}).json()

    assert body["count"] == 1
    assert body["bookings"][0]["phone"] == "9123456780"


def test_get_booking(client, ledger):
    booking_id = ledger.insert(make_booking())

    res = client.get(f"/api/bookings/{booking_id}")

    assert res.status_code == 200
    assert res.json()["booking"]["id"] == booking_id


def test_invalid_and_unknown_booking_ids(client):
    invalid = client.get("/api/bookings/not-an-id")
    assert invalid.status_code == 400
    assert invalid.json() == {"success": False, "message": "Invalid booking ID"}

    unknown = client.get("/api/bookings/65b1f0c2a1b2c3d4e5f60718")
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Booking not found"

    assert client.patch("/api/bookings/65b1f0c2a1b2c3d4e5f60718/cancel").status_code == 404
    assert client.delete("/api/bookings/65b1f0c2a1b2c3d4e5f60718").status_code == 404
    assert client.patch("/api/bookings/xyz", json={"status": "confirmed"}).status_code == 400


def test_cancel_twice_is_rejected(client):
    booking_id = _create(client).json()["booking"]["id"]
    client.patch(f"/api/bookings/{booking_id}/cancel")

    res = client.patch(f"/api/bookings/{booking_id}/cancel")

    assert res.status_code == 400
    assert res.json()["message"] == "Booking is already cancelled"


def test_cancel_past_booking_is_rejected(client, ledger):
    booking_id = ledger.insert(make_booking(day=date(2026, 1, 5)))

    res = client.patch(f"/api/bookings/{booking_id}/cancel")

    assert res.status_code == 400
    assert res.json()["message"] == "Cannot cancel past bookings"


def test_update_status_and_notes(client, notifier):
    booking_id = _create(client).json()["booking"]["id"]

    res = client.patch(f"/api/bookings/{booking_id}", json={"status": "completed", "notes": "Paid"})

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Booking updated successfully"
    assert body["booking"]["status"] == "completed"
    assert body["booking"]["notes"] == "Paid"
    assert notifier.kinds() == [NotificationKind.confirmation, NotificationKind.completion]


def test_update_status_rejects_unknown_status(client):
    booking_id = _create(client).json()["booking"]["id"]

    res = client.patch(f"/api/bookings/{booking_id}", json={"status": "no-show"})

    assert res.status_code == 400
    assert res.json()["message"].startswith("status:")


def test_reactivating_into_taken_slot_conflicts(client):
    first = _create(client).json()["booking"]["id"]
    client.patch(f"/api/bookings/{first}/cancel")
    _create(client, name="Meera Shah")

    res = client.patch(f"/api/bookings/{first}", json={"status": "confirmed"})

    assert res.status_code == 409


def test_delete_booking_frees_slot(client, ledger):
    booking_id = _create(client).json()["booking"]["id"]

    res = client.delete(f"/api/bookings/{booking_id}")

    assert res.status_code == 200
    assert res.json()["message"] == "Booking deleted successfully"
    assert ledger.get(booking_id) is None
    assert _create(client, name="Meera Shah").status_code == 201


def test_unknown_route_envelope(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Route not found: GET /api/nope"}


def test_health_and_index(client):
    health = client.get("/health").json()
    assert health["success"] is True
    assert health["message"] == "Server is running"

    index = client.get("/").json()
    assert index["endpoints"]["bookings"] == "/api/bookings"
