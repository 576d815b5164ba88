from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.models.service import Service, ServiceStatus, ServiceType
from app.models.shared import utc_now
from app.repositories.customer_repository import CustomerRepository
from app.repositories.hosting_plan_repository import HostingPlanRepository
from app.repositories.invoice_repository import InvoiceRepository
from app.repositories.service_repository import ServiceRepository
from app.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate

router = APIRouter()


@router.get(
    "/",
    response_model=list[ServiceResponse],
    summary="List services",
)
async def list_services(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    customer_id: UUID | None = None,
    service_type: ServiceType | None = None,
    status: ServiceStatus | None = None,
    db: Session = Depends(get_db),
) -> list[Service]:
    """List services ordered by expiry."""
    repo = ServiceRepository(db)
    response.headers["X-Total-Count"] = str(
        repo.count(customer_id=customer_id, service_type=service_type, status=status)
    )
    return repo.get_all(
        skip=skip,
        limit=limit,
        customer_id=customer_id,
        service_type=service_type,
        status=status,
    )


@router.get(
    "/expiring",
    response_model=list[ServiceResponse],
    summary="List services expiring soon",
)
async def list_expiring_services(
    days: int = Query(default=settings.RENEWAL_DAYS_BEFORE, ge=1, le=366),
    db: Session = Depends(get_db),
) -> list[Service]:
    """Active services whose expiry falls within the next ``days`` days."""
    now = utc_now()
    return ServiceRepository(db).list_active_expiring(now, now + timedelta(days=days))


@router.post(
    "/",
    response_model=ServiceResponse,
    status_code=201,
    summary="Create service",
    responses={
        400: {"description": "Plan missing for hosting service"},
        404: {"description": "Customer or plan not found"},
    },
)
async def create_service(
    data: ServiceCreate,
    db: Session = Depends(get_db),
) -> Service:
    """Register a provisioned hosting or domain service."""
    if not CustomerRepository(db).get_by_id(data.customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    if data.plan_id is not None and not HostingPlanRepository(db).get_by_id(data.plan_id):
        raise HTTPException(status_code=404, detail="Hosting plan not found")
    if data.service_type == ServiceType.HOSTING and data.plan_id is None:
        raise HTTPException(status_code=400, detail="Hosting services require a plan")
    return ServiceRepository(db).create(data)


@router.get(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Get service",
    responses={404: {"description": "Service not found"}},
)
async def get_service(
    service_id: UUID,
    db: Session = Depends(get_db),
) -> Service:
    service = ServiceRepository(db).get_by_id(service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.put(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Update service",
    responses={404: {"description": "Service or plan not found"}},
)
async def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    db: Session = Depends(get_db),
) -> Service:
    if data.plan_id is not None and not HostingPlanRepository(db).get_by_id(data.plan_id):
        raise HTTPException(status_code=404, detail="Hosting plan not found")
    service = ServiceRepository(db).update(service_id, data)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.delete(
    "/{service_id}",
    status_code=204,
    summary="Delete service",
    responses={
        400: {"description": "Service has invoices"},
        404: {"description": "Service not found"},
    },
)
async def delete_service(
    service_id: UUID,
    db: Session = Depends(get_db),
) -> None:
    """Delete a service that has never been invoiced."""
    if InvoiceRepository(db).count(service_id=service_id):
        raise HTTPException(status_code=400, detail="Service has invoices and cannot be deleted")
    if not ServiceRepository(db).delete(service_id):
        raise HTTPException(status_code=404, detail="Service not found")
