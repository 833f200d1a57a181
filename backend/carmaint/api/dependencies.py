"""
FastAPI dependency functions.

Builds repositories and services from the request's database session and
exposes the principal established by AccessControlMiddleware.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from carmaint.core.database import get_db
from carmaint.core.security import Authenticator, Principal
from carmaint.repositories.car import CarRepository
from carmaint.repositories.maintenance_record import MaintenanceRecordRepository
from carmaint.services.cars import CarService
from carmaint.services.maintenance import MaintenanceService


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def get_car_repository(db: DatabaseSession) -> CarRepository:
    return CarRepository(db)


def get_maintenance_repository(db: DatabaseSession) -> MaintenanceRecordRepository:
    return MaintenanceRecordRepository(db)


CarRepo = Annotated[CarRepository, Depends(get_car_repository)]
MaintenanceRepo = Annotated[MaintenanceRecordRepository, Depends(get_maintenance_repository)]


def get_maintenance_service(
    records: MaintenanceRepo, cars: CarRepo
) -> MaintenanceService:
    return MaintenanceService(records, cars)


def get_car_service(cars: CarRepo, records: MaintenanceRepo) -> CarService:
    return CarService(cars, records)


def get_authenticator(request: Request) -> Authenticator:
    """Return the authenticator created at application startup."""
    return request.app.state.authenticator


async def get_current_principal(request: Request) -> Principal:
    """
    Dependency to get the principal of the current request.

    Reads the principal stored by AccessControlMiddleware. The car and
    maintenance routers declare it so they never run anonymously, even
    if mounted under a path the middleware treats as open.

    Raises:
        HTTPException 401: If no principal was established

    Example:
        router = APIRouter(dependencies=[Depends(get_current_principal)])
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )
    return principal


# Type aliases for dependency injection
MaintenanceServiceDep = Annotated[MaintenanceService, Depends(get_maintenance_service)]
CarServiceDep = Annotated[CarService, Depends(get_car_service)]
AuthenticatorDep = Annotated[Authenticator, Depends(get_authenticator)]
