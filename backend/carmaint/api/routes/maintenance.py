"""
Maintenance record endpoints.

Both routes sit under the protected ``/maintenance`` prefix, so the
access control middleware has authenticated the caller before they run.
"""

from fastapi import APIRouter, Depends, status

from carmaint.api.dependencies import MaintenanceServiceDep, get_current_principal
from carmaint.schemas.maintenance import (
    MaintenanceRecordCreate,
    MaintenanceRecordResponse,
)


router = APIRouter(
    prefix="/maintenance",
    tags=["maintenance"],
    dependencies=[Depends(get_current_principal)],
)


@router.get(
    "",
    response_model=list[MaintenanceRecordResponse],
    summary="List maintenance records",
)
async def list_maintenance_records(
    service: MaintenanceServiceDep,
) -> list[MaintenanceRecordResponse]:
    """
    Return every maintenance record with its car embedded.

    Example response:
        [
            {
                "id": 1,
                "date": "2024-01-15",
                "description": "Oil change",
                "cost": 49.99,
                "car": {"id": 1, "make": "Toyota", "model": "Corolla", "year": 2018}
            }
        ]
    """
    return await service.list_all()


@router.post(
    "/car/{car_id}",
    response_model=MaintenanceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a maintenance record to a car",
    responses={404: {"description": "Car not found"}},
)
async def create_maintenance_record(
    car_id: int,
    payload: MaintenanceRecordCreate,
    service: MaintenanceServiceDep,
) -> MaintenanceRecordResponse:
    """
    Store a new record for car ``car_id``.

    The owning car is taken from the path; a ``car`` field in the body is
    ignored.
    """
    return await service.create(car_id, payload)
