from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.customer import Customer
from app.repositories.customer_repository import CustomerRepository
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

router = APIRouter()


@router.get("/", response_model=list[CustomerResponse], summary="List customers")
async def list_customers(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[Customer]:
    """List all customers with pagination."""
    repo = CustomerRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit)


@router.post(
    "/",
    response_model=CustomerResponse,
    status_code=201,
    summary="Create customer",
    responses={409: {"description": "Customer with this email already exists"}},
)
async def create_customer(data: CustomerCreate, db: Session = Depends(get_db)) -> Customer:
    repo = CustomerRepository(db)
    if repo.email_exists(data.email):
        raise HTTPException(status_code=409, detail="Customer with this email already exists")
    return repo.create(data)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Get customer",
    responses={404: {"description": "Customer not found"}},
)
async def get_customer(customer_id: UUID, db: Session = Depends(get_db)) -> Customer:
    customer = CustomerRepository(db).get_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    summary="Update customer",
    responses={404: {"description": "Customer not found"}},
)
async def update_customer(
    customer_id: UUID, data: CustomerUpdate, db: Session = Depends(get_db)
) -> Customer:
    customer = CustomerRepository(db).update(customer_id, data)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer
