"""Billing domain errors raised by the renewal and invoicing services."""

from datetime import datetime
from uuid import UUID


class BillingError(Exception):
    """Base class for billing failures that callers are expected to handle."""


class MissingPriceError(BillingError):
    """A service cannot be priced because its priceable attribute is missing.

    Raised for hosting services without an attached plan instead of silently
    billing zero.
    """

    def __init__(self, service_id: UUID, reason: str = "no hosting plan attached"):
        self.service_id = service_id
        self.reason = reason
        super().__init__(f"Cannot price service {service_id}: {reason}")


class DuplicateInvoiceError(BillingError):
    """An invoice already exists for the service's billing period."""

    def __init__(self, service_id: UUID, period_end: datetime | None):
        self.service_id = service_id
        self.period_end = period_end
        super().__init__(
            f"Service {service_id} already has an invoice for the period ending {period_end}"
        )


class InvoiceNumberAllocationError(BillingError):
    """No unique invoice number could be allocated within the retry budget."""
