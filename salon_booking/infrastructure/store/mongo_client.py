from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

BOOKINGS = "bookings"
TIMESLOTS = "timeslots"
SERVICES = "services"
REVIEWS = "reviews"


def connect(uri: str, db_name: str, timeout_ms: int = 5000) -> Database:
    client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=False)
    db = client[db_name]
    logger.info("MongoDB connected", extra={"database": db.name})
    return db


def ensure_indexes(db: Database) -> None:
    bookings = db[BOOKINGS]
    # active_slot only exists on non-cancelled bookings, so cancelled rows never collide.
    bookings.create_index(
        [("active_slot", ASCENDING)],
        name="uniq_active_slot",
        unique=True,
        partialFilterExpression={"active_slot": {"$exists": True}},
    )
    bookings.create_index([("date", ASCENDING), ("time", ASCENDING)])
    bookings.create_index([("date", ASCENDING), ("time_slot", ASCENDING)])
    bookings.create_index([("date", ASCENDING), ("user_id", ASCENDING)])
    bookings.create_index([("phone", ASCENDING)])
    bookings.create_index([("status", ASCENDING)])

    db[TIMESLOTS].create_index([("date", ASCENDING)], name="uniq_date", unique=True)
    db[SERVICES].create_index([("category", ASCENDING)])
    db[REVIEWS].create_index([("approved", ASCENDING), ("created_at", DESCENDING)])
