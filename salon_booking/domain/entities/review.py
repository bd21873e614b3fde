from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Review:
    name: str
    rating: int
    comment: str
    service: str
    email: str | None = None
    approved: bool = False
    verified: bool = False
    review_image: str | None = None
    id: str | None = None
    created_at: datetime | None = None
