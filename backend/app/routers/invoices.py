from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import BillingError
from app.models.invoice import Invoice, InvoiceStatus, InvoiceType
from app.repositories.invoice_repository import InvoiceRepository
from app.repositories.service_repository import ServiceRepository
from app.schemas.invoice import (
    InvoiceResponse,
    InvoiceStatistics,
    InvoiceUpdate,
    MarkPaidRequest,
    RenewalRunResponse,
    SetupInvoiceRequest,
)
from app.services.invoice_generation import InvoiceGenerationService

router = APIRouter()


@router.get(
    "/",
    response_model=list[InvoiceResponse],
    summary="List invoices",
)
async def list_invoices(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    customer_id: UUID | None = None,
    service_id: UUID | None = None,
    status: InvoiceStatus | None = None,
    invoice_type: InvoiceType | None = None,
    db: Session = Depends(get_db),
) -> list[Invoice]:
    """List invoices with optional filters."""
    repo = InvoiceRepository(db)
    response.headers["X-Total-Count"] = str(
        repo.count(
            customer_id=customer_id,
            service_id=service_id,
            status=status,
            invoice_type=invoice_type,
        )
    )
    return repo.get_all(
        skip=skip,
        limit=limit,
        customer_id=customer_id,
        service_id=service_id,
        status=status,
        invoice_type=invoice_type,
    )


@router.get(
    "/statistics",
    response_model=InvoiceStatistics,
    summary="Invoice statistics",
)
async def invoice_statistics(db: Session = Depends(get_db)) -> InvoiceStatistics:
    """Invoice count, paid revenue and outstanding amounts."""
    return InvoiceStatistics(**InvoiceRepository(db).statistics())


@router.post(
    "/generate_renewals",
    response_model=RenewalRunResponse,
    summary="Generate renewal invoices",
)
async def generate_renewals(
    days_before: int = Query(default=settings.RENEWAL_DAYS_BEFORE, ge=1, le=366),
    db: Session = Depends(get_db),
) -> RenewalRunResponse:
    """Create renewal invoices for active services expiring within ``days_before`` days."""
    result = InvoiceGenerationService(db).run_renewals(days_before)
    return RenewalRunResponse(
        days_before=result.days_before,
        created=result.created,
        skipped=result.skipped,
        failed=result.failed,
        invoice_numbers=result.invoice_numbers,
        errors=result.errors,
    )


@router.post(
    "/setup",
    response_model=InvoiceResponse,
    status_code=201,
    summary="Create setup invoice",
    responses={
        400: {"description": "Invoice could not be created"},
        404: {"description": "Service not found"},
    },
)
async def create_setup_invoice(
    data: SetupInvoiceRequest,
    db: Session = Depends(get_db),
) -> Invoice:
    """Issue a one-time setup invoice for a newly provisioned service."""
    service = ServiceRepository(db).get_by_id(data.service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    try:
        return InvoiceGenerationService(db).create_setup_invoice(service, data.amount)
    except (BillingError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Get invoice",
    responses={404: {"description": "Invoice not found"}},
)
async def get_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
) -> Invoice:
    """Get an invoice by ID."""
    invoice = InvoiceRepository(db).get_by_id(invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Update invoice",
    responses={
        404: {"description": "Invoice not found"},
        422: {"description": "Validation error"},
    },
)
async def update_invoice(
    invoice_id: UUID,
    data: InvoiceUpdate,
    db: Session = Depends(get_db),
) -> Invoice:
    """Update an invoice's status, discount, payment method or notes."""
    invoice = InvoiceRepository(db).update(invoice_id, data)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.post(
    "/{invoice_id}/mark_paid",
    response_model=InvoiceResponse,
    summary="Mark invoice as paid",
    responses={
        400: {"description": "Invoice is already paid or cancelled"},
        404: {"description": "Invoice not found"},
    },
)
async def mark_invoice_paid(
    invoice_id: UUID,
    data: MarkPaidRequest | None = None,
    db: Session = Depends(get_db),
) -> Invoice:
    """Record payment of an invoice."""
    payment_method = data.payment_method if data else None
    try:
        invoice = InvoiceRepository(db).mark_paid(invoice_id, payment_method)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.post(
    "/{invoice_id}/cancel",
    response_model=InvoiceResponse,
    summary="Cancel invoice",
    responses={
        400: {"description": "Paid invoices cannot be cancelled"},
        404: {"description": "Invoice not found"},
    },
)
async def cancel_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
) -> Invoice:
    """Cancel an unpaid invoice."""
    try:
        invoice = InvoiceRepository(db).cancel(invoice_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice
