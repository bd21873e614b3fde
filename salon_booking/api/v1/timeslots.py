import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import BlockSlotSchema, SlotBoardSchema, dump
from salon_booking.application.exceptions import ResourceNotFoundError
from salon_booking.application.use_cases.booking_coordinator import BookingCoordinator
from salon_booking.application.utils.dates import parse_day
from salon_booking.wiring.dependencies import get_booking_coordinator

router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_date_param(date: str | None):
    if not date:
        raise HTTPException(status_code=400, detail="Date parameter is required (format: YYYY-MM-DD)")
    try:
        return parse_day(date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")


@router.get("")
def get_time_slots(
    date: str | None = Query(None),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    board = coordinator.get_slot_board(_parse_date_param(date))
    return {"success": True, **dump(SlotBoardSchema.from_entity(board))}


@router.post("/block")
def block_slot(
    req: BlockSlotSchema,
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    try:
        coordinator.block_slot(req.slot_date, req.time)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Slot blocked"}


@router.post("/reconcile")
def reconcile_slots(
    date: str | None = Query(None),
    coordinator: BookingCoordinator = Depends(get_booking_coordinator),
):
    board = coordinator.reconcile_slot_board(_parse_date_param(date))
    return {"success": True, "message": "Slot board rebuilt from bookings", **dump(SlotBoardSchema.from_entity(board))}
