from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from salon_booking.domain.entities.service import Service, ServiceCategory


class ServiceCatalogPort(ABC):
    @abstractmethod
    def create(self, service: Service) -> Service:
        raise NotImplementedError

    @abstractmethod
    def list(self, category: ServiceCategory | None = None) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def get(self, service_id: str) -> Service | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, service_id: str, changes: dict[str, Any]) -> Service | None:
        """Apply field changes. Returns None if the service does not exist."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, service_id: str) -> bool:
        raise NotImplementedError
