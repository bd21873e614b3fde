import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import BookingCreateSchema, BookingSchema, BookingStatusUpdateSchema, dump
from salon_booking.application.exceptions import (
    AlreadyCancelledError,
    BookingNotFoundError,
    InvalidInputError,
    PastDateError,
    SlotConflictError,
    StorageError,
)
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.booking_coordinator import BookingCoordinator
from salon_booking.application.utils.dates import DATE_PATTERN, parse_day
from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.wiring.dependencies import get_booking_coordinator, get_booking_ledger, get_service_catalog

router = APIRouter()
logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def _require_object_id(booking_id: str) -> None:
    if not OBJECT_ID_PATTERN.match(booking_id):
        raise HTTPException(status_code=400, detail="Invalid booking ID")


def _present(booking: Booking, catalog: ServiceCatalogPort | None = None) -> dict:
    service = catalog.get(booking.service_id) if catalog and booking.service_id else None
    return dump(BookingSchema.from_entity(booking, service))


# ==================== PUBLIC ROUTES ====================

@router.get("/slots")
def get_booked_slots(
    date: str | None = Query(None),
    ledger: BookingLedgerPort = Depends(get_booking_ledger),
):
    if not date:
        raise HTTPException(status_code=400, detail="Date parameter is required (format: YYYY-MM-DD)")
    if not DATE_PATTERN.match(date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    try:
        day = parse_day(date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date")

    return {"success": True, "date": date, "bookedSlots": ledger.list_booked_times(day)}


@router.post("", status_code=201)
def create_booking(
    req: BookingCreateSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    try:
        booking = coordinator.create(req.to_entity())
    except (InvalidInputError, PastDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SlotConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("Error creating booking", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to create booking")

    return {"success": True, "message": "Booking created successfully", "booking": _present(booking)}


# ==================== ADMIN ROUTES ====================

@router.get("/all")
def list_all_bookings(
    page: int = Query(1),
    limit: int = Query(50),
    date: str | None = Query(None),
    status: BookingStatus | None = Query(None),
    search: str | None = Query(None),
    ledger: BookingLedgerPort = Depends(get_booking_ledger),
    catalog: ServiceCatalogPort = Depends(get_service_catalog),
):
    page_num = max(1, page)
    limit_num = min(100, max(1, limit))
    day = None
    if date:
        try:
            day = parse_day(date)
        except ValueError:
            # an unparseable date filter is ignored
            day = None

    bookings = ledger.list_bookings(day=day, status=status, search=search or None, page=page_num, limit=limit_num)
    total = ledger.count_bookings(day=day, status=status, search=search or None)
    return {
        "success": True,
        "bookings": [_present(b, catalog) for b in bookings],
        "totalPages": -(-total // limit_num),
        "currentPage": page_num,
        "total": total,
    }


@router.get("/my-bookings")
def list_my_bookings(
    phone: str | None = Query(None),
    ledger: BookingLedgerPort = Depends(get_booking_ledger),
    catalog: ServiceCatalogPort = Depends(get_service_catalog),
):
    bookings = ledger.list_bookings(phone=phone or None)
    return {"success": True, "count": len(bookings), "bookings": [_present(b, catalog) for b in bookings]}


@router.patch("/{booking_id}/cancel")
def cancel_booking(
    booking_id: str,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    _require_object_id(booking_id)
    try:
        coordinator.cancel(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (AlreadyCancelledError, PastDateError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error("Error cancelling booking", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to cancel booking")

    return {"success": True, "message": "Booking cancelled successfully"}


# ==================== DYNAMIC ROUTES ====================

@router.get("/{booking_id}")
def get_booking(
    booking_id: str,
    ledger: BookingLedgerPort = Depends(get_booking_ledger),
    catalog: ServiceCatalogPort = Depends(get_service_catalog),
):
    _require_object_id(booking_id)
    booking = ledger.get(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"success": True, "booking": _present(booking, catalog)}


@router.patch("/{booking_id}")
def update_booking(
    booking_id: str,
    req: BookingStatusUpdateSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    _require_object_id(booking_id)
    try:
        booking = coordinator.update_status(booking_id, req.status, req.notes)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("Error updating booking", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to update booking")

    return {
        "success": True,
        "message": "Booking updated successfully",
        "booking": {
            "id": booking.id,
            "name": booking.name,
            "status": booking.status.value,
            "date": booking.date.isoformat(),
            "time": booking.time,
            "timeSlot": booking.effective_time,
            "notes": booking.notes,
        },
    }


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: str,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    _require_object_id(booking_id)
    try:
        coordinator.delete(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error("Error deleting booking", extra={"booking_id": booking_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to delete booking")

    return {"success": True, "message": "Booking deleted successfully"}
