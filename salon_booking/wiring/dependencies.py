from functools import lru_cache
import logging

from pymongo.database import Database

from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.notifier import NotifierPort
from salon_booking.application.ports.review_store import ReviewStorePort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.ports.slot_board import SlotBoardPort
from salon_booking.application.use_cases.booking_coordinator import BookingCoordinator
from salon_booking.application.use_cases.reviews import ReviewsUseCase
from salon_booking.application.use_cases.send_reminders import SendRemindersUseCase
from salon_booking.application.use_cases.services import ServicesUseCase
from salon_booking.application.utils.dates import safe_timezone
from salon_booking.application.utils.side_effects import BestEffortRunner
from salon_booking.application.utils.slots import build_default_slot_generator
from salon_booking.core.config import settings
from salon_booking.infrastructure.notifications.mock_notifier import MockNotifier
from salon_booking.infrastructure.notifications.whatsapp_client import TwilioWhatsAppClient
from salon_booking.infrastructure.notifications.whatsapp_notifier import WhatsAppNotifier
from salon_booking.infrastructure.store.memory_store import (
    MemoryBookingLedger,
    MemoryReviewStore,
    MemoryServiceCatalog,
    MemorySlotBoard,
)
from salon_booking.infrastructure.store.mongo_client import connect, ensure_indexes
from salon_booking.infrastructure.store.mongo_store import (
    MongoBookingLedger,
    MongoReviewStore,
    MongoServiceCatalog,
    MongoSlotBoard,
)

logger = logging.getLogger(__name__)


def _use_mongo() -> bool:
    return settings.STORE_PROVIDER.lower() == "mongo"


@lru_cache
def get_database() -> Database:
    if not settings.MONGO_URI:
        raise ValueError("MONGO_URI is required when STORE_PROVIDER=mongo")
    db = connect(settings.MONGO_URI, settings.MONGO_DB_NAME, settings.MONGO_TIMEOUT_MS)
    ensure_indexes(db)
    return db


@lru_cache
def get_booking_ledger() -> BookingLedgerPort:
    if _use_mongo():
        return MongoBookingLedger(get_database())
    return MemoryBookingLedger()


@lru_cache
def get_slot_board() -> SlotBoardPort:
    if _use_mongo():
        return MongoSlotBoard(get_database())
    return MemorySlotBoard()


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    if _use_mongo():
        return MongoServiceCatalog(get_database())
    return MemoryServiceCatalog()


@lru_cache
def get_review_store() -> ReviewStorePort:
    if _use_mongo():
        return MongoReviewStore(get_database())
    return MemoryReviewStore()


@lru_cache
def get_notifier() -> NotifierPort:
    if not (settings.TWILIO_SID and settings.TWILIO_TOKEN and settings.TWILIO_WHATSAPP_FROM):
        logger.info("Using MockNotifier (Twilio not configured)")
        return MockNotifier(business_name=settings.BUSINESS_NAME)

    logger.info("Using WhatsAppNotifier")
    client = TwilioWhatsAppClient(
        account_sid=settings.TWILIO_SID,
        auth_token=settings.TWILIO_TOKEN,
        from_number=settings.TWILIO_WHATSAPP_FROM,
        base_url=settings.TWILIO_API_BASE_URL,
        timeout=settings.NOTIFY_TIMEOUT_SECONDS,
    )
    return WhatsAppNotifier(
        client=client,
        business_name=settings.BUSINESS_NAME,
        country_code=settings.NOTIFY_COUNTRY_CODE,
    )


@lru_cache
def get_best_effort_runner() -> BestEffortRunner:
    return BestEffortRunner(timeout_seconds=settings.SIDE_EFFECT_TIMEOUT_SECONDS)


@lru_cache
def get_booking_coordinator() -> BookingCoordinator:
    return BookingCoordinator(
        ledger=get_booking_ledger(),
        slot_board=get_slot_board(),
        notifier=get_notifier(),
        timezone=safe_timezone(settings.BUSINESS_TIMEZONE),
        runner=get_best_effort_runner(),
        slot_generator=build_default_slot_generator(
            settings.SLOT_DAY_START_HOUR,
            settings.SLOT_DAY_END_HOUR,
            settings.SLOT_INTERVAL_MINUTES,
        ),
    )


def get_services_use_case() -> ServicesUseCase:
    return ServicesUseCase(catalog=get_service_catalog())


def get_reviews_use_case() -> ReviewsUseCase:
    return ReviewsUseCase(store=get_review_store())


def get_send_reminders_use_case() -> SendRemindersUseCase:
    return SendRemindersUseCase(
        ledger=get_booking_ledger(),
        notifier=get_notifier(),
        timezone=safe_timezone(settings.BUSINESS_TIMEZONE),
    )
