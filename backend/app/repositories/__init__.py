from app.repositories.customer_repository import CustomerRepository
from app.repositories.hosting_plan_repository import HostingPlanRepository
from app.repositories.invoice_repository import InvoiceRepository
from app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from app.repositories.service_repository import ServiceRepository

__all__ = [
    "CustomerRepository",
    "HostingPlanRepository",
    "InvoiceRepository",
    "InvoiceSequenceRepository",
    "ServiceRepository",
]
