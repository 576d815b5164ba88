from app.models.customer import Customer
from app.models.hosting_plan import HostingPlan
from app.models.invoice import BillingCycle, Invoice, InvoiceStatus, InvoiceType
from app.models.invoice_sequence import InvoiceSequence
from app.models.service import Service, ServiceStatus, ServiceType

__all__ = [
    "BillingCycle",
    "Customer",
    "HostingPlan",
    "Invoice",
    "InvoiceSequence",
    "InvoiceStatus",
    "InvoiceType",
    "Service",
    "ServiceStatus",
    "ServiceType",
]
