from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceType(str, Enum):
    RENEWAL = "renewal"
    SETUP = "setup"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi_annually"
    ANNUALLY = "annually"


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        # One invoice per service per billing period; period_end is NULL for
        # setup invoices, which keeps them out of the constraint.
        UniqueConstraint(
            "service_id", "invoice_type", "period_end", name="uq_invoices_service_period"
        ),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    invoice_number = Column(String(50), unique=True, index=True, nullable=False)
    invoice_type = Column(String(20), nullable=False, default=InvoiceType.RENEWAL.value)
    service_id = Column(
        UUIDType, ForeignKey("services.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default=InvoiceStatus.PENDING.value, index=True)

    amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    billing_cycle = Column(String(20), nullable=False, default=BillingCycle.MONTHLY.value)

    # Dates
    issue_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    period_end = Column(DateTime(timezone=True), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    payment_method = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
