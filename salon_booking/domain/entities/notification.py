from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class NotificationKind(str, Enum):
    confirmation = "confirmation"
    cancellation = "cancellation"
    completion = "completion"
    reminder = "reminder"


@dataclass(frozen=True)
class NotificationDetails:
    name: str
    service: str
    date: date
    time: str
