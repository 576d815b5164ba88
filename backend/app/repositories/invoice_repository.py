from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.models.invoice import Invoice, InvoiceStatus, InvoiceType
from app.models.shared import utc_now
from app.schemas.invoice import InvoiceCreate, InvoiceUpdate


class InvoiceRepository:
    """Invoice store: creation, duplicate checks and lifecycle transitions."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        customer_id: UUID | None = None,
        service_id: UUID | None = None,
        status: InvoiceStatus | None = None,
        invoice_type: InvoiceType | None = None,
    ) -> list[Invoice]:
        query = self._filtered(customer_id, service_id, status, invoice_type)
        return query.order_by(Invoice.invoice_number.desc()).offset(skip).limit(limit).all()

    def count(
        self,
        customer_id: UUID | None = None,
        service_id: UUID | None = None,
        status: InvoiceStatus | None = None,
        invoice_type: InvoiceType | None = None,
    ) -> int:
        return self._filtered(customer_id, service_id, status, invoice_type).count()

    def _filtered(
        self,
        customer_id: UUID | None,
        service_id: UUID | None,
        status: InvoiceStatus | None,
        invoice_type: InvoiceType | None,
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(Invoice)
        if customer_id:
            query = query.filter(Invoice.customer_id == customer_id)
        if service_id:
            query = query.filter(Invoice.service_id == service_id)
        if status:
            query = query.filter(Invoice.status == status.value)
        if invoice_type:
            query = query.filter(Invoice.invoice_type == invoice_type.value)
        return query

    def get_by_id(self, invoice_id: UUID) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.id == invoice_id).first()

    def get_by_invoice_number(self, invoice_number: str) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()

    def exists_renewal_invoice_in_window(
        self, service_id: UUID, window_start: datetime, window_end: datetime
    ) -> bool:
        """Whether a renewal invoice for the service is due within [window_start, window_end]."""
        query = self.db.query(Invoice.id).filter(
            Invoice.service_id == service_id,
            Invoice.invoice_type == InvoiceType.RENEWAL.value,
            Invoice.due_date >= window_start,
            Invoice.due_date <= window_end,
        )
        return query.first() is not None

    def exists_for_period(
        self, service_id: UUID, invoice_type: InvoiceType, period_end: datetime
    ) -> bool:
        query = self.db.query(Invoice.id).filter(
            Invoice.service_id == service_id,
            Invoice.invoice_type == invoice_type.value,
            Invoice.period_end == period_end,
        )
        return query.first() is not None

    def find_latest_by_number_prefix(self, prefix: str) -> Invoice | None:
        """Get the invoice with the highest number carrying the given prefix."""
        return (
            self.db.query(Invoice)
            .filter(Invoice.invoice_number.like(f"{prefix}%"))
            .order_by(Invoice.invoice_number.desc())
            .first()
        )

    def create(self, data: InvoiceCreate, invoice_number: str) -> Invoice:
        invoice = Invoice(
            invoice_number=invoice_number,
            invoice_type=data.invoice_type.value,
            service_id=data.service_id,
            customer_id=data.customer_id,
            status=InvoiceStatus.PENDING.value,
            amount=data.amount,
            discount=data.discount,
            billing_cycle=data.billing_cycle.value,
            issue_date=data.issue_date,
            due_date=data.due_date,
            period_end=data.period_end,
            notes=data.notes,
        )
        self.db.add(invoice)
        self.db.commit()
        self.db.refresh(invoice)
        return invoice

    def update(self, invoice_id: UUID, data: InvoiceUpdate) -> Invoice | None:
        invoice = self.get_by_id(invoice_id)
        if not invoice:
            return None

        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("status"):
            new_status = update_data["status"]
            update_data["status"] = new_status.value
            if new_status == InvoiceStatus.PAID and invoice.status != InvoiceStatus.PAID.value:
                update_data["paid_at"] = utc_now()

        for key, value in update_data.items():
            setattr(invoice, key, value)

        self.db.commit()
        self.db.refresh(invoice)
        return invoice

    def mark_paid(self, invoice_id: UUID, payment_method: str | None = None) -> Invoice | None:
        """Mark an invoice as paid."""
        invoice = self.get_by_id(invoice_id)
        if not invoice:
            return None
        if invoice.status == InvoiceStatus.PAID.value:
            raise ValueError("Invoice is already paid")
        if invoice.status == InvoiceStatus.CANCELLED.value:
            raise ValueError("Cancelled invoices cannot be paid")

        invoice.status = InvoiceStatus.PAID.value  # type: ignore[assignment]
        invoice.paid_at = utc_now()  # type: ignore[assignment]
        invoice.payment_method = payment_method  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(invoice)
        return invoice

    def cancel(self, invoice_id: UUID) -> Invoice | None:
        """Cancel an unpaid invoice."""
        invoice = self.get_by_id(invoice_id)
        if not invoice:
            return None
        if invoice.status == InvoiceStatus.PAID.value:
            raise ValueError("Paid invoices cannot be cancelled")

        invoice.status = InvoiceStatus.CANCELLED.value  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(invoice)
        return invoice

    def mark_overdue(self, now: datetime) -> int:
        """Flag pending invoices whose due date has passed. Returns rows updated."""
        count = (
            self.db.query(Invoice)
            .filter(
                Invoice.status == InvoiceStatus.PENDING.value,
                Invoice.due_date < now,
            )
            .update({Invoice.status: InvoiceStatus.OVERDUE.value}, synchronize_session=False)
        )
        self.db.commit()
        return int(count)

    def statistics(self) -> dict[str, int | Decimal]:
        """Invoice count and amount totals per payment state."""

        def _sum(status: InvoiceStatus) -> Decimal:
            total = (
                self.db.query(func.coalesce(func.sum(Invoice.amount), 0))
                .filter(Invoice.status == status.value)
                .scalar()
            )
            return Decimal(str(total))

        return {
            "total": self.db.query(Invoice).count(),
            "revenue": _sum(InvoiceStatus.PAID),
            "pending": _sum(InvoiceStatus.PENDING),
            "overdue": _sum(InvoiceStatus.OVERDUE),
        }
