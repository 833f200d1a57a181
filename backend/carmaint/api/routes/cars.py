"""
Car endpoints.
"""

from fastapi import APIRouter, Depends, Response, status

from carmaint.api.dependencies import CarServiceDep, get_current_principal
from carmaint.schemas.car import CarCreate, CarResponse


router = APIRouter(
    prefix="/cars",
    tags=["cars"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[CarResponse], summary="List cars")
async def list_cars(service: CarServiceDep) -> list[CarResponse]:
    return await service.list_all()


@router.post(
    "",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a car",
)
async def create_car(payload: CarCreate, service: CarServiceDep) -> CarResponse:
    return await service.create(payload)


@router.get(
    "/{car_id}",
    response_model=CarResponse,
    summary="Get a car",
    responses={404: {"description": "Car not found"}},
)
async def get_car(car_id: int, service: CarServiceDep) -> CarResponse:
    return await service.get(car_id)


@router.put(
    "/{car_id}",
    response_model=CarResponse,
    summary="Replace a car's details",
    responses={404: {"description": "Car not found"}},
)
async def update_car(
    car_id: int, payload: CarCreate, service: CarServiceDep
) -> CarResponse:
    return await service.update(car_id, payload)


@router.delete(
    "/{car_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a car",
    responses={
        404: {"description": "Car not found"},
        409: {"description": "Car still has maintenance records"},
    },
)
async def delete_car(car_id: int, service: CarServiceDep) -> Response:
    """
    Delete a car without maintenance records.

    Cars that still own records are kept and a 409 is returned.
    """
    await service.delete(car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
