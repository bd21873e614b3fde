import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from salon_booking.application.utils.dates import parse_day
from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.domain.entities.review import Review
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.domain.entities.slot_board import SlotBoardEntry

TIME_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"
PHONE_PATTERN = r"^[0-9]{10}$"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --------- Requests ---------

class BookingCreateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    phone: str = Field(pattern=PHONE_PATTERN)
    email: EmailStr | None = None
    service: str = Field(min_length=1)
    service_id: str | None = Field(None, alias="serviceId")
    booking_date: dt.date = Field(alias="date")
    time: str | None = Field(None, pattern=TIME_PATTERN)
    time_slot: str | None = Field(None, alias="timeSlot", pattern=TIME_PATTERN)
    notes: str | None = Field(None, max_length=500)
    status: BookingStatus | None = None
    user_id: str | None = Field(None, alias="userId")

    @field_validator("email", "service_id", "user_id", "time", "time_slot", "notes", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("booking_date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        return parse_day(value)

    @model_validator(mode="after")
    def _require_time(self) -> "BookingCreateSchema":
        if not self.time and not self.time_slot:
            raise ValueError("Either time or timeSlot is required")
        return self

    def to_entity(self) -> Booking:
        return Booking(
            name=self.name,
            phone=self.phone,
            email=self.email.lower() if self.email else None,
            service=self.service,
            service_id=self.service_id,
            date=self.booking_date,
            time=self.time,
            time_slot=self.time_slot,
            notes=self.notes,
            status=self.status or BookingStatus.confirmed,
            user_id=self.user_id,
        ).with_synced_times()


class BookingStatusUpdateSchema(BaseModel):
    status: BookingStatus
    notes: str | None = Field(None, max_length=500)


class BlockSlotSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    slot_date: dt.date = Field(alias="date")
    time: str = Field(pattern=TIME_PATTERN)

    @field_validator("slot_date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        return parse_day(value)


class ServiceCreateSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(ge=0)
    duration: int = Field(gt=0, description="Duration in minutes")
    category: ServiceCategory
    image: str | None = None

    def to_entity(self) -> Service:
        return Service(**self.model_dump())


class ServiceUpdateSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    duration: int | None = Field(None, gt=0)
    category: ServiceCategory | None = None
    image: str | None = None


class ReviewCreateSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: EmailStr | None = None
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1, max_length=500)
    service: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def to_entity(self) -> Review:
        return Review(
            name=self.name,
            email=self.email.lower() if self.email else None,
            rating=self.rating,
            comment=self.comment,
            service=self.service,
        )


# --------- Responses ---------

class ServiceSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    duration: int
    category: ServiceCategory
    image: str | None = None
    created_at: dt.datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: dt.datetime | None = Field(None, serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            price=service.price,
            duration=service.duration,
            category=service.category,
            image=service.image,
            created_at=service.created_at,
            updated_at=service.updated_at,
        )


class BookingSchema(BaseModel):
    id: str
    name: str
    phone: str
    email: str | None = None
    service: str
    service_id: str | None = Field(None, serialization_alias="serviceId")
    service_details: dict[str, Any] | None = Field(None, serialization_alias="serviceDetails")
    date: str
    time: str
    time_slot: str = Field(serialization_alias="timeSlot")
    status: BookingStatus
    notes: str | None = None
    user_id: str | None = Field(None, serialization_alias="userId")
    created_at: dt.datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: dt.datetime | None = Field(None, serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, booking: Booking, service: Service | None = None) -> "BookingSchema":
        return cls(
            id=booking.id,
            name=booking.name,
            phone=booking.phone,
            email=booking.email,
            service=booking.service,
            service_id=booking.service_id,
            service_details=(
                {"id": service.id, "name": service.name, "duration": service.duration} if service else None
            ),
            date=booking.date.isoformat(),
            time=booking.time or booking.effective_time,
            time_slot=booking.effective_time,
            status=booking.status,
            notes=booking.notes,
            user_id=booking.user_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class SlotSchema(BaseModel):
    time: str
    available: bool
    booked_by: str | None = Field(None, serialization_alias="bookedBy")


class SlotBoardSchema(BaseModel):
    date: str
    slots: list[SlotSchema]

    @classmethod
    def from_entity(cls, board: SlotBoardEntry) -> "SlotBoardSchema":
        return cls(
            date=board.date.isoformat(),
            slots=[SlotSchema(time=s.time, available=s.available, booked_by=s.booked_by) for s in board.slots],
        )


class ReviewSchema(BaseModel):
    id: str
    name: str
    email: str | None = None
    rating: int
    comment: str
    service: str
    approved: bool
    verified: bool
    review_image: str | None = Field(None, serialization_alias="reviewImage")
    created_at: dt.datetime | None = Field(None, serialization_alias="createdAt")

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewSchema":
        return cls(
            id=review.id,
            name=review.name,
            email=review.email,
            rating=review.rating,
            comment=review.comment,
            service=review.service,
            approved=review.approved,
            verified=review.verified,
            review_image=review.review_image,
            created_at=review.created_at,
        )


def dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)
