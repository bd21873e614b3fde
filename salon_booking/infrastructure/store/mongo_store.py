from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from salon_booking.application.exceptions import (
    AlreadyCancelledError,
    BookingNotFoundError,
    PastDateError,
    SlotConflictError,
    StorageError,
)
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.review_store import ReviewStorePort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.ports.slot_board import SlotBoardPort, SlotGenerator
from salon_booking.application.utils.dates import day_to_storage
from salon_booking.domain.entities.booking import Booking, BookingStatus, slot_key
from salon_booking.domain.entities.review import Review
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.domain.entities.slot_board import Slot, SlotBoardEntry
from salon_booking.infrastructure.store.mongo_client import BOOKINGS, REVIEWS, SERVICES, TIMESLOTS


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _oid(value: str | None) -> ObjectId | None:
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _str_id(value: Any) -> str | None:
    return str(value) if value is not None else None


class MongoBookingLedger(BookingLedgerPort):
    def __init__(self, db: Database) -> None:
        self._collection = db[BOOKINGS]

    def get(self, booking_id: str) -> Booking | None:
        oid = _oid(booking_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return self._from_doc(doc) if doc else None

    def find_conflict(self, day: date, effective_time: str, exclude_cancelled: bool = True) -> Booking | None:
        query: dict[str, Any] = {
            "date": day_to_storage(day),
            "$or": [
                {"time_slot": effective_time},
                {"time_slot": None, "time": effective_time},
            ],
        }
        if exclude_cancelled:
            query["status"] = {"$ne": BookingStatus.cancelled.value}
        doc = self._collection.find_one(query)
        return self._from_doc(doc) if doc else None

    def insert(self, booking: Booking) -> str:
        now = _utc_now()
        doc = self._to_doc(replace(booking.with_synced_times(), created_at=now, updated_at=now))
        try:
            result = self._collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise SlotConflictError() from e
        except PyMongoError as e:
            raise StorageError(f"Failed to store booking: {e}") from e
        return str(result.inserted_id)

    def update_status(self, booking_id: str, new_status: BookingStatus, notes: str | None = None) -> Booking:
        current = self.get(booking_id)
        if current is None:
            raise BookingNotFoundError()

        updated = replace(
            current,
            status=new_status,
            notes=notes if notes is not None else current.notes,
        ).with_synced_times()
        update: dict[str, Any] = {
            "$set": {
                "status": new_status.value,
                "notes": updated.notes,
                "time": updated.time,
                "time_slot": updated.time_slot,
                "updated_at": _utc_now(),
            }
        }
        if updated.is_active:
            update["$set"]["active_slot"] = slot_key(updated.date, updated.effective_time)
        else:
            update["$unset"] = {"active_slot": ""}

        try:
            doc = self._collection.find_one_and_update(
                {"_id": ObjectId(booking_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise SlotConflictError() from e
        except PyMongoError as e:
            raise StorageError(f"Failed to update booking: {e}") from e
        if doc is None:
            raise BookingNotFoundError()
        return self._from_doc(doc)

    def cancel(self, booking_id: str, today: date) -> Booking:
        current = self.get(booking_id)
        if current is None:
            raise BookingNotFoundError()
        if current.status == BookingStatus.cancelled:
            raise AlreadyCancelledError()
        if current.date < today:
            raise PastDateError("Cannot cancel past bookings")

        try:
            doc = self._collection.find_one_and_update(
                {"_id": ObjectId(booking_id), "status": {"$ne": BookingStatus.cancelled.value}},
                {
                    "$set": {"status": BookingStatus.cancelled.value, "updated_at": _utc_now()},
                    "$unset": {"active_slot": ""},
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to cancel booking: {e}") from e
        if doc is None:
            # cancelled (or deleted) by a concurrent request since the read above
            raise AlreadyCancelledError()
        return self._from_doc(doc)

    def delete(self, booking_id: str) -> None:
        oid = _oid(booking_id)
        if oid is None:
            raise BookingNotFoundError()
        try:
            result = self._collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete booking: {e}") from e
        if result.deleted_count == 0:
            raise BookingNotFoundError()

    def list_booked_times(self, day: date) -> list[str]:
        cursor = self._collection.find(
            {"date": day_to_storage(day), "status": {"$ne": BookingStatus.cancelled.value}},
            {"time": 1, "time_slot": 1, "_id": 0},
        )
        return sorted({doc.get("time_slot") or doc.get("time") for doc in cursor} - {None, ""})

    def list_active_on(self, day: date) -> list[Booking]:
        cursor = self._collection.find(
            {"date": day_to_storage(day), "status": {"$ne": BookingStatus.cancelled.value}}
        )
        return [self._from_doc(doc) for doc in cursor]

    def list_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> list[Booking]:
        cursor = self._collection.find(self._query(day, status, search, phone)).sort(
            [("date", DESCENDING), ("time_slot", ASCENDING)]
        )
        if limit is not None:
            cursor = cursor.skip((max(page, 1) - 1) * limit).limit(limit)
        return [self._from_doc(doc) for doc in cursor]

    def count_bookings(
        self,
        day: date | None = None,
        status: BookingStatus | None = None,
        search: str | None = None,
        phone: str | None = None,
    ) -> int:
        return self._collection.count_documents(self._query(day, status, search, phone))

    @staticmethod
    def _query(
        day: date | None,
        status: BookingStatus | None,
        search: str | None,
        phone: str | None,
    ) -> dict[str, Any]:
        query: dict[str, Any] = {}
        if day is not None:
            query["date"] = day_to_storage(day)
        if status is not None:
            query["status"] = status.value
        if phone is not None:
            query["phone"] = phone
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{"name": pattern}, {"phone": pattern}, {"email": pattern}]
        return query

    @staticmethod
    def _to_doc(booking: Booking) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "name": booking.name,
            "phone": booking.phone,
            "email": booking.email,
            "service": booking.service,
            "service_id": _oid(booking.service_id),
            "date": day_to_storage(booking.date),
            "time": booking.time,
            "time_slot": booking.time_slot,
            "status": booking.status.value,
            "notes": booking.notes,
            "user_id": _oid(booking.user_id),
            "created_at": booking.created_at,
            "updated_at": booking.updated_at,
        }
        if booking.is_active:
            doc["active_slot"] = slot_key(booking.date, booking.effective_time)
        return doc

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> Booking:
        return Booking(
            id=str(doc["_id"]),
            name=doc["name"],
            phone=doc["phone"],
            email=doc.get("email"),
            service=doc["service"],
            service_id=_str_id(doc.get("service_id")),
            date=doc["date"].date(),
            time=doc.get("time"),
            time_slot=doc.get("time_slot"),
            status=BookingStatus(doc.get("status", BookingStatus.confirmed.value)),
            notes=doc.get("notes"),
            user_id=_str_id(doc.get("user_id")),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )


class MongoSlotBoard(SlotBoardPort):
    def __init__(self, db: Database) -> None:
        self._collection = db[TIMESLOTS]
        self._logger = logging.getLogger(__name__)

    def find(self, day: date) -> SlotBoardEntry | None:
        doc = self._collection.find_one({"date": day_to_storage(day)})
        return self._from_doc(doc) if doc else None

    def get_or_create(self, day: date, generator: SlotGenerator) -> SlotBoardEntry:
        existing = self.find(day)
        if existing is not None:
            return existing

        now = _utc_now()
        slots = [self._slot_to_doc(slot) for slot in generator(day)]
        try:
            result = self._collection.update_one(
                {"date": day_to_storage(day)},
                {"$setOnInsert": {"slots": slots, "created_at": now, "updated_at": now}},
                upsert=True,
            )
        except DuplicateKeyError:
            # another request materialised the board first
            result = None
        if result is not None and result.upserted_id is not None:
            self._logger.info("Slot board created", extra={"date": day.isoformat(), "slots": len(slots)})
        board = self.find(day)
        if board is None:
            raise StorageError(f"Slot board for {day.isoformat()} was not persisted")
        return board

    def mark_unavailable(self, day: date, time: str, booking_id: str) -> None:
        self._set_slot(day, time, available=False, booked_by=_oid(booking_id))

    def mark_available(self, day: date, time: str) -> None:
        self._set_slot(day, time, available=True, booked_by=None)

    def block_manually(self, day: date, time: str) -> bool:
        return self._set_slot(day, time, available=False, booked_by=None)

    def save(self, entry: SlotBoardEntry) -> None:
        self._collection.update_one(
            {"date": day_to_storage(entry.date)},
            {
                "$set": {"slots": [self._slot_to_doc(s) for s in entry.slots], "updated_at": _utc_now()},
                "$setOnInsert": {"created_at": _utc_now()},
            },
            upsert=True,
        )

    def _set_slot(self, day: date, time: str, available: bool, booked_by: ObjectId | None) -> bool:
        result = self._collection.update_one(
            {"date": day_to_storage(day), "slots.time": time},
            {
                "$set": {
                    "slots.$.available": available,
                    "slots.$.booked_by": booked_by,
                    "updated_at": _utc_now(),
                }
            },
        )
        if result.matched_count == 0:
            self._logger.info("No slot row to update", extra={"date": day.isoformat(), "time": time})
            return False
        return True

    @staticmethod
    def _slot_to_doc(slot: Slot) -> dict[str, Any]:
        return {"time": slot.time, "available": slot.available, "booked_by": _oid(slot.booked_by)}

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> SlotBoardEntry:
        return SlotBoardEntry(
            id=str(doc["_id"]),
            date=doc["date"].date(),
            slots=[
                Slot(time=s["time"], available=s.get("available", True), booked_by=_str_id(s.get("booked_by")))
                for s in doc.get("slots", [])
            ],
        )


class MongoServiceCatalog(ServiceCatalogPort):
    def __init__(self, db: Database) -> None:
        self._collection = db[SERVICES]

    def create(self, service: Service) -> Service:
        now = _utc_now()
        created = replace(service, created_at=now, updated_at=now)
        result = self._collection.insert_one(self._to_doc(created))
        return replace(created, id=str(result.inserted_id))

    def list(self, category: ServiceCategory | None = None) -> list[Service]:
        query = {"category": category.value} if category else {}
        return [self._from_doc(doc) for doc in self._collection.find(query)]

    def get(self, service_id: str) -> Service | None:
        oid = _oid(service_id)
        doc = self._collection.find_one({"_id": oid}) if oid else None
        return self._from_doc(doc) if doc else None

    def update(self, service_id: str, changes: dict[str, Any]) -> Service | None:
        oid = _oid(service_id)
        if oid is None:
            return None
        values = {k: (v.value if isinstance(v, ServiceCategory) else v) for k, v in changes.items()}
        values["updated_at"] = _utc_now()
        doc = self._collection.find_one_and_update(
            {"_id": oid}, {"$set": values}, return_document=ReturnDocument.AFTER
        )
        return self._from_doc(doc) if doc else None

    def delete(self, service_id: str) -> bool:
        oid = _oid(service_id)
        return bool(oid) and self._collection.delete_one({"_id": oid}).deleted_count > 0

    @staticmethod
    def _to_doc(service: Service) -> dict[str, Any]:
        return {
            "name": service.name,
            "description": service.description,
            "price": service.price,
            "duration": service.duration,
            "category": service.category.value,
            "image": service.image,
            "created_at": service.created_at,
            "updated_at": service.updated_at,
        }

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> Service:
        return Service(
            id=str(doc["_id"]),
            name=doc["name"],
            description=doc.get("description"),
            price=doc["price"],
            duration=doc["duration"],
            category=ServiceCategory(doc["category"]),
            image=doc.get("image"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )


class MongoReviewStore(ReviewStorePort):
    def __init__(self, db: Database) -> None:
        self._collection = db[REVIEWS]

    def create(self, review: Review) -> Review:
        created = replace(review, created_at=review.created_at or _utc_now())
        doc = {
            "name": created.name,
            "email": created.email,
            "rating": created.rating,
            "comment": created.comment,
            "service": created.service,
            "approved": created.approved,
            "verified": created.verified,
            "review_image": created.review_image,
            "created_at": created.created_at,
        }
        result = self._collection.insert_one(doc)
        return replace(created, id=str(result.inserted_id))

    def list(self, approved_only: bool = False) -> list[Review]:
        query = {"approved": True} if approved_only else {}
        cursor = self._collection.find(query).sort("created_at", DESCENDING)
        return [self._from_doc(doc) for doc in cursor]

    def approve(self, review_id: str) -> Review | None:
        oid = _oid(review_id)
        if oid is None:
            return None
        doc = self._collection.find_one_and_update(
            {"_id": oid}, {"$set": {"approved": True}}, return_document=ReturnDocument.AFTER
        )
        return self._from_doc(doc) if doc else None

    def delete(self, review_id: str) -> bool:
        oid = _oid(review_id)
        return bool(oid) and self._collection.delete_one({"_id": oid}).deleted_count > 0

    @staticmethod
    def _from_doc(doc: dict[str, Any]) -> Review:
        return Review(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc.get("email"),
            rating=doc["rating"],
            comment=doc["comment"],
            service=doc["service"],
            approved=doc.get("approved", False),
            verified=doc.get("verified", False),
            review_image=doc.get("review_image"),
            created_at=doc.get("created_at"),
        )
