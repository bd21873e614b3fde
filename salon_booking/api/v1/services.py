from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import ServiceCreateSchema, ServiceSchema, ServiceUpdateSchema, dump
from salon_booking.application.exceptions import ResourceNotFoundError
from salon_booking.application.use_cases.services import ServicesUseCase
from salon_booking.domain.entities.service import ServiceCategory
from salon_booking.wiring.dependencies import get_services_use_case

router = APIRouter()


@router.post("", status_code=201)
def create_service(
    req: ServiceCreateSchema,
    uc: ServicesUseCase = Depends(get_services_use_case),
):
    service = uc.create(req.to_entity())
    return {"success": True, "message": "Service created successfully", "service": dump(ServiceSchema.from_entity(service))}


@router.get("")
def list_services(
    category: ServiceCategory | None = Query(None),
    uc: ServicesUseCase = Depends(get_services_use_case),
):
    services = uc.list(category)
    return {"success": True, "count": len(services), "services": [dump(ServiceSchema.from_entity(s)) for s in services]}


@router.get("/{service_id}")
def get_service(
    service_id: str,
    uc: ServicesUseCase = Depends(get_services_use_case),
):
    try:
        service = uc.get(service_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "service": dump(ServiceSchema.from_entity(service))}


@router.put("/{service_id}")
def update_service(
    service_id: str,
    req: ServiceUpdateSchema,
    uc: ServicesUseCase = Depends(get_services_use_case),
):
    changes = req.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        service = uc.update(service_id, changes)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Service updated successfully", "service": dump(ServiceSchema.from_entity(service))}


@router.delete("/{service_id}")
def delete_service(
    service_id: str,
    uc: ServicesUseCase = Depends(get_services_use_case),
):
    try:
        uc.delete(service_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Service deleted successfully"}
