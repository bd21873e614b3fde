from __future__ import annotations

import logging
from typing import Any

from salon_booking.application.exceptions import ResourceNotFoundError
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.domain.entities.service import Service, ServiceCategory


class ServicesUseCase:
    def __init__(self, catalog: ServiceCatalogPort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def create(self, service: Service) -> Service:
        created = self._catalog.create(service)
        self._logger.info("Service created", extra={"service": created.name})
        return created

    def list(self, category: ServiceCategory | None = None) -> list[Service]:
        return self._catalog.list(category)

    def get(self, service_id: str) -> Service:
        service = self._catalog.get(service_id)
        if service is None:
            raise ResourceNotFoundError("Service not found")
        return service

    def update(self, service_id: str, changes: dict[str, Any]) -> Service:
        updated = self._catalog.update(service_id, changes)
        if updated is None:
            raise ResourceNotFoundError("Service not found")
        return updated

    def delete(self, service_id: str) -> None:
        if not self._catalog.delete(service_id):
            raise ResourceNotFoundError("Service not found")
