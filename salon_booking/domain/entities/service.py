from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ServiceCategory(str, Enum):
    hair = "hair"
    skin = "skin"
    bridal = "bridal"


@dataclass(frozen=True)
class Service:
    name: str
    price: float
    duration: int  # minutes
    category: ServiceCategory
    description: str | None = None
    image: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
