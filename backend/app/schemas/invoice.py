from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.invoice import BillingCycle, InvoiceStatus, InvoiceType


class InvoiceCreate(BaseModel):
    customer_id: UUID
    service_id: UUID
    invoice_type: InvoiceType = InvoiceType.RENEWAL
    amount: Decimal = Field(..., ge=0)
    discount: Decimal = Field(default=Decimal("0"), ge=0)
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    issue_date: datetime
    due_date: datetime
    period_end: datetime | None = None
    notes: str | None = Field(default=None, max_length=1000)


class InvoiceUpdate(BaseModel):
    status: InvoiceStatus | None = None
    discount: Decimal | None = Field(default=None, ge=0)
    payment_method: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=1000)


class MarkPaidRequest(BaseModel):
    payment_method: str | None = Field(default=None, max_length=50)


class SetupInvoiceRequest(BaseModel):
    service_id: UUID
    amount: Decimal = Field(..., ge=0)


class RenewalRunResponse(BaseModel):
    days_before: int
    created: int
    skipped: int
    failed: int
    invoice_numbers: list[str]
    errors: list[str]


class InvoiceStatistics(BaseModel):
    total: int
    revenue: Decimal
    pending: Decimal
    overdue: Decimal


class InvoiceResponse(BaseModel):
    id: UUID
    invoice_number: str
    invoice_type: str
    service_id: UUID
    customer_id: UUID
    status: str
    amount: Decimal
    discount: Decimal
    billing_cycle: str
    issue_date: datetime
    due_date: datetime
    period_end: datetime | None
    paid_at: datetime | None
    payment_method: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
